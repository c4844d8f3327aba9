"""Coverage data model.

File-centric model for CTL coverage data. One CoverageModel accumulates every
report document of a run; a FileRecord is reused whenever the same normalized
path reappears, which is where documents are merged.

Merge policy per counter:
- lines:     max across observations ("was this line ever executed")
- functions: max across observations
- branches:  summed, since each function contributes a disjoint tally
"""

from __future__ import annotations

from dataclasses import dataclass, field


def rate(covered: int, total: int) -> float:
    """Percentage covered/total x 100, 0.0 when total is 0."""
    if total <= 0:
        return 0.0
    return covered / total * 100.0


@dataclass(slots=True)
class BranchTally:
    """Accumulated branch summary: (total, executed)."""

    total: int = 0
    executed: int = 0

    def add(self, total: int, executed: int) -> None:
        self.total += total
        self.executed += executed


@dataclass(slots=True)
class FileRecord:
    """Coverage data for a single CTL script file.

    Lines are stored as a dict mapping line number → max hit count.
    A line or function absent from its dict was never observed.
    """

    path: str  # normalized, forward slashes
    lines: dict[int, int] = field(default_factory=dict)  # line_number → hit_count
    functions: dict[str, int] = field(default_factory=dict)  # name → invocation count
    branches: BranchTally = field(default_factory=BranchTally)

    def observe_line(self, line: int, hits: int) -> None:
        self.lines[line] = max(self.lines.get(line, 0), hits)

    def observe_function(self, name: str, count: int) -> None:
        self.functions[name] = max(self.functions.get(name, 0), count)

    def add_branches(self, total: int, executed: int) -> None:
        self.branches.add(total, executed)

    @property
    def lines_found(self) -> int:
        """Total number of observed lines."""
        return len(self.lines)

    @property
    def lines_hit(self) -> int:
        """Number of lines with at least one hit."""
        return sum(1 for hits in self.lines.values() if hits > 0)

    @property
    def functions_found(self) -> int:
        return len(self.functions)

    @property
    def functions_hit(self) -> int:
        """Number of functions invoked at least once."""
        return sum(1 for count in self.functions.values() if count > 0)


@dataclass(slots=True)
class CoverageModel:
    """Coverage for every file of a run, keyed by normalized path."""

    files: dict[str, FileRecord] = field(default_factory=dict)  # path → record

    def get_or_create(self, path: str) -> FileRecord:
        """Return the record for path, creating an empty one on first sight."""
        record = self.files.get(path)
        if record is None:
            record = FileRecord(path=path)
            self.files[path] = record
        return record

    def sorted_records(self) -> list[FileRecord]:
        """Records ordered lexicographically by path."""
        return [self.files[path] for path in sorted(self.files)]


@dataclass(frozen=True, slots=True)
class FileStat:
    """Per-file statistics. Rates are percentages (0-100)."""

    path: str
    lines: int
    covered: int
    line_rate: float
    functions: int
    func_covered: int
    func_rate: float
    branches_total: int
    branches_executed: int
    branch_rate: float


@dataclass(frozen=True, slots=True)
class AggregateStats:
    """Totals across all files. Rates are percentages (0-100)."""

    files: int
    lines: int
    covered: int
    line_rate: float
    functions: int
    func_covered: int
    func_rate: float
    branches_total: int
    branches_executed: int
    branch_rate: float
