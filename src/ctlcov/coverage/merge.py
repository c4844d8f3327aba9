"""Folding partial coverage models into one.

Used when documents are extracted into independent models (``--jobs``). The
fold applies exactly the rules the extractor applies while parsing:

- line[i]     = max(line[i] across models)
- function[k] = max(function[k] across models)
- branches    = sum of (total, executed) across models

so a parallel run yields the same numbers as a sequential one.
"""

from collections.abc import Iterable

from ctlcov.coverage.models import CoverageModel, FileRecord


def merge_file_record(target: FileRecord, source: FileRecord) -> FileRecord:
    """Fold source into target in place and return target.

    Args:
        target: Record that accumulates the result.
        source: Record for the same path; left unchanged.
    """
    if target.path != source.path:
        raise ValueError(
            f"Cannot merge records for different paths: {target.path!r}, {source.path!r}"
        )

    for line_num, hits in source.lines.items():
        target.observe_line(line_num, hits)
    for name, count in source.functions.items():
        target.observe_function(name, count)
    target.add_branches(source.branches.total, source.branches.executed)
    return target


def merge_into(target: CoverageModel, source: CoverageModel) -> CoverageModel:
    """Fold every record of source into target in place and return target."""
    for path, record in source.files.items():
        merge_file_record(target.get_or_create(path), record)
    return target


def merge_models(models: Iterable[CoverageModel]) -> CoverageModel:
    """Fold models in order into a fresh CoverageModel.

    Inputs are not mutated.
    """
    merged = CoverageModel()
    for model in models:
        merge_into(merged, model)
    return merged
