"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides builders for WinCC OA coverage report documents.
"""

import sys
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local ctlcov package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of ctlcov modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("ctlcov"):
        del sys.modules[module_name]


class CtlReport:
    """Builds report documents in the layout the CTL interpreter writes."""

    @staticmethod
    def func(
        name: str,
        count: int,
        *,
        nodes: Iterable[tuple[int, int]] = (),
        branches: tuple[int, int] | None = None,
        line: int = 1,
        signature: str | None = None,
    ) -> str:
        signature = signature if signature is not None else f"{name}()"
        body = "".join(f'\n      <node line="{ln}" count="{hits}"/>' for ln, hits in nodes)
        if branches is not None:
            body += f'\n      <branches total="{branches[0]}" executed="{branches[1]}"/>'
        return (
            f'    <func line="{line}"\n'
            f'          name="{name}"\n'
            f'          signature="{signature}"\n'
            f'          count="{count}">{body}\n'
            f"    </func>"
        )

    @staticmethod
    def script(path: str, *funcs: str) -> str:
        inner = "\n".join(funcs)
        return f'  <script>\n    <file path="{path}"/>\n{inner}\n  </script>'

    @staticmethod
    def document(*scripts: str) -> str:
        inner = "\n".join(scripts)
        return f'<?xml version="1.0" encoding="UTF-8"?>\n<coverage>\n{inner}\n</coverage>\n'


@pytest.fixture
def ctl() -> type[CtlReport]:
    """Report document builder."""
    return CtlReport


@pytest.fixture
def write_report(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a report document into tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
