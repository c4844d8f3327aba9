"""Folding a batch of report documents into one CoverageModel.

Sequential runs parse every document straight into the shared model. With
``jobs > 1`` each document is parsed on a worker thread into its own partial
model and the partial models are folded afterwards, in document order, by
merge_models. Either way a document that cannot be read is recorded as a
failure and the batch continues.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from ctlcov.core.errors import CoverageReadError
from ctlcov.core.progress import progress
from ctlcov.coverage.merge import merge_models
from ctlcov.coverage.models import CoverageModel
from ctlcov.coverage.parser import CtlCoverageParser

log = structlog.get_logger()


@dataclass(slots=True)
class CollectResult:
    """Outcome of folding a batch of documents."""

    model: CoverageModel
    parsed: list[Path] = field(default_factory=list)
    failures: list[CoverageReadError] = field(default_factory=list)


def _parse_isolated(
    parser: CtlCoverageParser, document: Path
) -> CoverageModel | CoverageReadError:
    partial = CoverageModel()
    try:
        parser.parse(document, partial)
    except CoverageReadError as e:
        return e
    return partial


def collect(
    documents: Sequence[Path],
    parser: CtlCoverageParser,
    *,
    jobs: int = 1,
) -> CollectResult:
    """Parse documents and fold them into a single model.

    Args:
        documents: Report documents, in the order they should be folded.
        parser: Configured parser (carries the path filter).
        jobs: Worker threads; 1 parses sequentially.

    Returns:
        CollectResult with the merged model, parsed documents and read failures.
    """
    if jobs <= 1:
        result = CollectResult(model=CoverageModel())
        for document in progress(documents, desc="Parsing"):
            try:
                parser.parse(document, result.model)
            except CoverageReadError as e:
                log.warning("coverage_read_failed", **e.details)
                result.failures.append(e)
                continue
            result.parsed.append(document)
        return result

    partials: list[CoverageModel] = []
    parsed: list[Path] = []
    failures: list[CoverageReadError] = []
    with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="ctlcov-parse") as executor:
        outcomes = executor.map(lambda doc: _parse_isolated(parser, doc), documents)
        for document, outcome in zip(
            documents, progress(outcomes, desc="Parsing", total=len(documents)), strict=True
        ):
            if isinstance(outcome, CoverageReadError):
                log.warning("coverage_read_failed", **outcome.details)
                failures.append(outcome)
                continue
            partials.append(outcome)
            parsed.append(document)

    log.debug("partials_folded", partials=len(partials), jobs=jobs)
    return CollectResult(model=merge_models(partials), parsed=parsed, failures=failures)
