"""WinCC OA CTL coverage report parser.

The CTL interpreter writes one ``CoverageReport_*.xml`` per run. Structure::

    <coverage>
      <script>
        <file path="scripts\\libs\\foo.ctl"/>
        <func line="12" name="main" signature="main()" count="3">
          <node line="13" count="3"/>
          <node line="14" count="0"/>
          <branches total="4" executed="2"/>
        </func>
      </script>
    </coverage>

The documents are frequently bundled with foreign or truncated XML, so this
parser scans for the fragments it needs instead of building a tree. Anything
it cannot recognize (a block without a file path, a function without a name
or count, a node with a non-numeric line) is skipped, never raised.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import Path
from xml.sax.saxutils import unescape

import structlog

from ctlcov.core.errors import CoverageReadError
from ctlcov.coverage.models import CoverageModel, FileRecord

log = structlog.get_logger()

_SCRIPT_RE = re.compile(r"<script\b[^>]*>(.*?)</script>", re.DOTALL)
_FILE_PATH_RE = re.compile(r'<file\b[^>]*?\bpath="([^"]+)"')
_FUNC_RE = re.compile(r"<func\b([^>]*?)(?<!/)>(.*?)</func>", re.DOTALL)
_NODE_RE = re.compile(r"<node\b([^>]*)>")
_BRANCHES_RE = re.compile(r"<branches\b([^>]*)>")
_ATTR_RE = re.compile(r'([\w:.-]+)\s*=\s*"([^"]*)"')
_COUNT_RE = re.compile(r"[0-9]+")
_SLASHES_RE = re.compile(r"/{2,}")

_ENTITIES = {"&quot;": '"', "&apos;": "'"}


def normalize_path(raw: str) -> str:
    """Canonical form of a declared script path.

    Backslashes become forward slashes, then ``.``/``..`` segments and
    duplicate separators are collapsed, including a leading ``//``.
    """
    path = _SLASHES_RE.sub("/", unescape(raw, _ENTITIES).replace("\\", "/"))
    return posixpath.normpath(path)


def _attributes(fragment: str) -> dict[str, str]:
    return {name: value for name, value in _ATTR_RE.findall(fragment)}


def _count(value: str | None) -> int | None:
    """Parse a non-negative integer attribute, None if absent or malformed."""
    if value is None or not _COUNT_RE.fullmatch(value.strip()):
        return None
    return int(value)


class CtlCoverageParser:
    """Folds CTL coverage report documents into a CoverageModel.

    Args:
        path_filter: Case-insensitive substring; blocks whose normalized path
            does not contain it are skipped. None or empty keeps everything.
    """

    def __init__(self, path_filter: str | None = None) -> None:
        self._filter = path_filter.lower() if path_filter else None

    def accepts(self, path: str) -> bool:
        """Check a normalized path against the filter."""
        return self._filter is None or self._filter in path.lower()

    def parse(self, path: Path, model: CoverageModel) -> int:
        """Read one report document and fold it into model.

        Returns:
            Number of blocks retained.

        Raises:
            CoverageReadError: If the document cannot be read.
        """
        try:
            # Invalid bytes are replaced, the scan only needs the markup
            text = path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            raise CoverageReadError.unreadable(str(path), str(e)) from e

        blocks = self.parse_text(text, model)
        log.debug("document_parsed", path=str(path), blocks=blocks)
        return blocks

    def parse_text(self, text: str, model: CoverageModel) -> int:
        """Fold one raw document into model. Returns number of blocks retained."""
        retained = 0
        for script in _SCRIPT_RE.finditer(text):
            body = script.group(1)

            path_match = _FILE_PATH_RE.search(body)
            if path_match is None:
                log.debug("block_skipped", reason="no_file_path")
                continue

            file_path = normalize_path(path_match.group(1))
            if not self.accepts(file_path):
                log.debug("block_skipped", reason="filtered", path=file_path)
                continue

            self._parse_block(body, model.get_or_create(file_path))
            retained += 1
        return retained

    def _parse_block(self, body: str, record: FileRecord) -> None:
        for func in _FUNC_RE.finditer(body):
            attrs = _attributes(func.group(1))
            name = attrs.get("name")
            count = _count(attrs.get("count"))
            if not name or count is None:
                log.debug("func_skipped", path=record.path, attrs=attrs)
                continue

            record.observe_function(unescape(name, _ENTITIES), count)

            func_body = func.group(2)
            for node in _NODE_RE.finditer(func_body):
                node_attrs = _attributes(node.group(1))
                line = _count(node_attrs.get("line"))
                hits = _count(node_attrs.get("count"))
                if line is None or hits is None:
                    continue
                record.observe_line(line, hits)

            branch_match = _BRANCHES_RE.search(func_body)
            if branch_match is not None:
                branch_attrs = _attributes(branch_match.group(1))
                total = _count(branch_attrs.get("total"))
                executed = _count(branch_attrs.get("executed"))
                if total is not None and executed is not None:
                    record.add_branches(total, executed)
