"""Cobertura XML export.

Writes the merged model in the Cobertura layout consumed by CI coverage
viewers::

    <coverage lines-valid=".." lines-covered=".." line-rate=".." ...>
      <packages>
        <package name="WinCC_OA" line-rate=".." branch-rate="..">
          <classes>
            <class name="foo.ctl" filename="scripts/foo.ctl" line-rate="..">
              <methods>
                <method name="main" signature="" line-rate="1.0" branch-rate="0"/>
              </methods>
              <lines>
                <line number="10" hits="3"/>
              </lines>
            </class>
          </classes>
        </package>
      </packages>
    </coverage>

Rates here are fractions (0-1) with four decimals, unlike the percentages
used by the console report. A method's line-rate is 1.0 if it was ever
invoked and 0.0 otherwise.
"""

import posixpath
import time
from pathlib import Path
from xml.sax.saxutils import escape

import structlog

from ctlcov.config.constants import COBERTURA_DTD, COBERTURA_VERSION, DEFAULT_PACKAGE_NAME
from ctlcov.core.formatting import round_half_up
from ctlcov.coverage.models import CoverageModel, FileRecord

log = structlog.get_logger()

_ATTR_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    """Escape the five reserved markup characters."""
    return escape(text, _ATTR_ENTITIES)


def fraction(covered: int, total: int) -> str:
    """covered/total with four decimals (ties rounded up), "0.0000" when total is 0."""
    value = covered / total if total > 0 else 0.0
    return round_half_up(value, 4)


def _class_element(record: FileRecord) -> list[str]:
    name = escape_xml(posixpath.basename(record.path))
    filename = escape_xml(record.path)
    line_rate = fraction(record.lines_hit, record.lines_found)
    branch_rate = fraction(record.branches.executed, record.branches.total)

    out = [
        f'        <class name="{name}" filename="{filename}" line-rate="{line_rate}" '
        f'branch-rate="{branch_rate}" complexity="0">',
        "          <methods>",
    ]
    for func_name in sorted(record.functions):
        method_rate = "1.0" if record.functions[func_name] > 0 else "0.0"
        out.append(
            f'            <method name="{escape_xml(func_name)}" signature="" '
            f'line-rate="{method_rate}" branch-rate="0"/>'
        )
    out.append("          </methods>")
    out.append("          <lines>")
    for line_num in sorted(record.lines):
        out.append(f'            <line number="{line_num}" hits="{record.lines[line_num]}"/>')
    out.append("          </lines>")
    out.append("        </class>")
    return out


def build_cobertura_xml(
    model: CoverageModel,
    *,
    package_name: str = DEFAULT_PACKAGE_NAME,
    timestamp: int | None = None,
) -> str:
    """Render the model as a Cobertura XML document.

    Args:
        model: Finalized coverage model.
        package_name: Name of the single package grouping every file.
        timestamp: Milliseconds since the epoch; defaults to now.

    Returns:
        The document text, newline terminated.
    """
    if timestamp is None:
        timestamp = int(time.time() * 1000)

    records = model.sorted_records()
    lines_valid = sum(r.lines_found for r in records)
    lines_covered = sum(r.lines_hit for r in records)
    branches_valid = sum(r.branches.total for r in records)
    branches_covered = sum(r.branches.executed for r in records)

    line_rate = fraction(lines_covered, lines_valid)
    branch_rate = fraction(branches_covered, branches_valid)

    out = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<!DOCTYPE coverage SYSTEM "{COBERTURA_DTD}">',
        f'<coverage version="{COBERTURA_VERSION}" timestamp="{timestamp}" '
        f'lines-valid="{lines_valid}" lines-covered="{lines_covered}" line-rate="{line_rate}" '
        f'branches-valid="{branches_valid}" branches-covered="{branches_covered}" '
        f'branch-rate="{branch_rate}" complexity="0">',
        "  <packages>",
        f'    <package name="{escape_xml(package_name)}" line-rate="{line_rate}" '
        f'branch-rate="{branch_rate}" complexity="0">',
        "      <classes>",
    ]
    for record in records:
        out.extend(_class_element(record))
    out.extend(
        [
            "      </classes>",
            "    </package>",
            "  </packages>",
            "</coverage>",
        ]
    )
    return "\n".join(out) + "\n"


def write_cobertura(
    model: CoverageModel,
    output_path: Path,
    *,
    package_name: str = DEFAULT_PACKAGE_NAME,
) -> Path:
    """Write the Cobertura document to output_path, replacing any existing file.

    Write errors (permissions, missing directory) propagate to the caller.
    """
    output_path.write_text(build_cobertura_xml(model, package_name=package_name), encoding="utf-8")
    log.info("cobertura_written", path=str(output_path), files=len(model.files))
    return output_path
