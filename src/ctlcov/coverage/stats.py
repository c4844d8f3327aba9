"""Coverage statistics.

Derives per-file and aggregate numbers from a finalized CoverageModel. Pure
functions: nothing here mutates the model or caches results, stats are
computed fresh for every report.
"""

from collections.abc import Sequence

from ctlcov.coverage.models import AggregateStats, CoverageModel, FileRecord, FileStat, rate


def compute_file_stat(record: FileRecord) -> FileStat:
    """Statistics for a single file."""
    lines = record.lines_found
    covered = record.lines_hit
    functions = record.functions_found
    func_covered = record.functions_hit
    return FileStat(
        path=record.path,
        lines=lines,
        covered=covered,
        line_rate=rate(covered, lines),
        functions=functions,
        func_covered=func_covered,
        func_rate=rate(func_covered, functions),
        branches_total=record.branches.total,
        branches_executed=record.branches.executed,
        branch_rate=rate(record.branches.executed, record.branches.total),
    )


def compute_file_stats(model: CoverageModel) -> list[FileStat]:
    """Compute per-file coverage statistics.

    Args:
        model: The coverage model to analyze.

    Returns:
        One FileStat per file, sorted by path.
    """
    return [compute_file_stat(record) for record in model.sorted_records()]


def compute_aggregate(file_stats: Sequence[FileStat]) -> AggregateStats:
    """Sum per-file statistics into run totals."""
    lines = sum(fs.lines for fs in file_stats)
    covered = sum(fs.covered for fs in file_stats)
    functions = sum(fs.functions for fs in file_stats)
    func_covered = sum(fs.func_covered for fs in file_stats)
    branches_total = sum(fs.branches_total for fs in file_stats)
    branches_executed = sum(fs.branches_executed for fs in file_stats)

    return AggregateStats(
        files=len(file_stats),
        lines=lines,
        covered=covered,
        line_rate=rate(covered, lines),
        functions=functions,
        func_covered=func_covered,
        func_rate=rate(func_covered, functions),
        branches_total=branches_total,
        branches_executed=branches_executed,
        branch_rate=rate(branches_executed, branches_total),
    )


def compute_stats(model: CoverageModel) -> tuple[list[FileStat], AggregateStats]:
    """Per-file statistics and their aggregate in one pass over the model."""
    file_stats = compute_file_stats(model)
    return file_stats, compute_aggregate(file_stats)
