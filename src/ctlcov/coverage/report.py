"""Fixed-width text report.

Layout (80 columns)::

    ================================================================================
    WinCC OA Code Coverage Report
    ================================================================================

    File                                                            Lines    Cover    Rate
    --------------------------------------------------------------------------------
    scripts/foo.ctl                                                     4        3   75.0%
    --------------------------------------------------------------------------------

    SUMMARY
    ----------------------------------------
    Files:          1
    Lines:          3 / 4      (75.0%)
    Functions:      1 / 1      (100.0%)
    Branches:       2 / 4      (50.0%)

    Coverage: [██████████████████████████████████████░░░░░░░░░░░░] 75.0%
    ================================================================================

The per-file table only appears in verbose mode.
"""

import math
from collections.abc import Sequence

import click

from ctlcov.config.constants import (
    BAR_EMPTY,
    BAR_FILLED,
    COUNT_COLUMN_WIDTH,
    PATH_COLUMN_WIDTH,
    RATE_COLUMN_WIDTH,
    RULE_WIDTH,
    SUMMARY_COUNT_WIDTH,
    SUMMARY_RULE_WIDTH,
)
from ctlcov.config.models import ReportConfig
from ctlcov.core.formatting import format_percent, truncate_path_tail
from ctlcov.coverage.models import AggregateStats, CoverageModel, FileStat
from ctlcov.coverage.stats import compute_stats


def coverage_bar(line_rate: float, width: int = 50) -> str:
    """Proportional bar, filled cells rounded half-up to the nearest cell."""
    filled = math.floor(width * line_rate / 100 + 0.5)
    filled = max(0, min(width, filled))
    return BAR_FILLED * filled + BAR_EMPTY * (width - filled)


def _file_table(file_stats: Sequence[FileStat], path_width: int) -> list[str]:
    lines = [
        f"{'File':<{PATH_COLUMN_WIDTH}} {'Lines':>{COUNT_COLUMN_WIDTH}} "
        f"{'Cover':>{COUNT_COLUMN_WIDTH}} {'Rate':>{RATE_COLUMN_WIDTH}}",
        "-" * RULE_WIDTH,
    ]
    for fs in file_stats:
        short_path = truncate_path_tail(fs.path, path_width)
        pct = format_percent(fs.line_rate)
        lines.append(
            f"{short_path:<{PATH_COLUMN_WIDTH}} {fs.lines:>{COUNT_COLUMN_WIDTH}} "
            f"{fs.covered:>{COUNT_COLUMN_WIDTH}} {pct:>{RATE_COLUMN_WIDTH}}"
        )
    lines.append("-" * RULE_WIDTH)
    lines.append("")
    return lines


def _summary_row(label: str, covered: int, total: int, pct: float) -> str:
    return (
        f"{label:<11}{covered:>{SUMMARY_COUNT_WIDTH}} / "
        f"{total:<{SUMMARY_COUNT_WIDTH}} ({format_percent(pct)})"
    )


def build_text_report(
    file_stats: Sequence[FileStat],
    aggregate: AggregateStats,
    *,
    verbose: bool = False,
    config: ReportConfig | None = None,
) -> list[str]:
    """Render statistics into report lines (no trailing newlines).

    Args:
        file_stats: Per-file statistics, already sorted by path.
        aggregate: Totals across file_stats.
        verbose: Include the per-file table.
        config: Layout options (title, path and bar widths).
    """
    config = config or ReportConfig()

    lines = ["=" * RULE_WIDTH, config.title, "=" * RULE_WIDTH, ""]

    if verbose:
        lines.extend(_file_table(file_stats, config.path_width))

    lines.extend(
        [
            "SUMMARY",
            "-" * SUMMARY_RULE_WIDTH,
            f"{'Files:':<11}{aggregate.files:>{SUMMARY_COUNT_WIDTH}}",
            _summary_row("Lines:", aggregate.covered, aggregate.lines, aggregate.line_rate),
            _summary_row(
                "Functions:", aggregate.func_covered, aggregate.functions, aggregate.func_rate
            ),
            _summary_row(
                "Branches:",
                aggregate.branches_executed,
                aggregate.branches_total,
                aggregate.branch_rate,
            ),
            "",
            f"Coverage: [{coverage_bar(aggregate.line_rate, config.bar_width)}] "
            f"{format_percent(aggregate.line_rate)}",
            "=" * RULE_WIDTH,
        ]
    )
    return lines


def print_report(
    model: CoverageModel,
    *,
    verbose: bool = False,
    config: ReportConfig | None = None,
) -> float:
    """Compute statistics, echo the report to stdout and return the overall line rate.

    The returned percentage (0-100) is the only value leaving the rendering
    step; callers use it for threshold checks.
    """
    file_stats, aggregate = compute_stats(model)
    for line in build_text_report(file_stats, aggregate, verbose=verbose, config=config):
        click.echo(line)
    return aggregate.line_rate
