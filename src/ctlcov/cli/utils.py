"""CLI utilities."""

from pathlib import Path

import structlog

from ctlcov.core.errors import DiscoveryError

log = structlog.get_logger()


def find_coverage_files(path: Path, pattern: str) -> list[Path]:
    """Locate coverage report documents.

    A file is returned as-is, whatever its name. A directory is scanned
    (not recursively) for names matching pattern; matches are sorted by name
    so the fold order is stable across platforms.

    Args:
        path: Report document or directory of documents
        pattern: Glob for document names, e.g. ``CoverageReport_*.xml``

    Returns:
        Documents to process, possibly empty
    """
    if path.is_file():
        return [path]
    if not path.is_dir():
        return []
    try:
        return sorted(p for p in path.glob(pattern) if p.is_file())
    except OSError as e:
        log.debug("directory_unreadable", path=str(path), error=str(e))
        return []


def discover_documents(path: Path, pattern: str) -> list[Path]:
    """Like find_coverage_files, but an empty result is an error.

    Raises:
        DiscoveryError: If no documents were located
    """
    documents = find_coverage_files(path, pattern)
    if not documents:
        raise DiscoveryError.no_documents(str(path))
    log.debug("documents_found", path=str(path), count=len(documents))
    return documents
