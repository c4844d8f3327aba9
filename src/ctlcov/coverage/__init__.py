"""CTL coverage parsing, merging, and reporting.

This package provides:
- Extraction of WinCC OA ``CoverageReport_*.xml`` documents
- Merging across documents (max for lines/functions, sum for branches)
- Per-file and aggregate statistics
- Fixed-width text report and Cobertura XML export

Usage:
    from ctlcov.coverage import CoverageModel, CtlCoverageParser, print_report, write_cobertura

    model = CoverageModel()
    parser = CtlCoverageParser(path_filter="scripts/libs")
    for document in documents:
        parser.parse(document, model)

    overall = print_report(model, verbose=True)
    write_cobertura(model, Path("cobertura.xml"))
"""

from ctlcov.coverage.cobertura import build_cobertura_xml, write_cobertura
from ctlcov.coverage.collect import CollectResult, collect
from ctlcov.coverage.merge import merge_file_record, merge_into, merge_models
from ctlcov.coverage.models import (
    AggregateStats,
    BranchTally,
    CoverageModel,
    FileRecord,
    FileStat,
    rate,
)
from ctlcov.coverage.parser import CtlCoverageParser, normalize_path
from ctlcov.coverage.report import build_text_report, coverage_bar, print_report
from ctlcov.coverage.stats import (
    compute_aggregate,
    compute_file_stat,
    compute_file_stats,
    compute_stats,
)

__all__ = [
    # Models
    "AggregateStats",
    "BranchTally",
    "CoverageModel",
    "FileRecord",
    "FileStat",
    "rate",
    # Extraction
    "CtlCoverageParser",
    "normalize_path",
    "CollectResult",
    "collect",
    # Merge
    "merge_file_record",
    "merge_into",
    "merge_models",
    # Statistics
    "compute_aggregate",
    "compute_file_stat",
    "compute_file_stats",
    "compute_stats",
    # Output
    "build_text_report",
    "coverage_bar",
    "print_report",
    "build_cobertura_xml",
    "write_cobertura",
]
