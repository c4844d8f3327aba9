"""Tests for CLI utilities."""

from pathlib import Path

import pytest

from ctlcov.cli.utils import discover_documents, find_coverage_files
from ctlcov.core.errors import DiscoveryError, ErrorCode

PATTERN = "CoverageReport_*.xml"


class TestFindCoverageFiles:
    """Tests for find_coverage_files."""

    def test_given_file_when_find_then_returned_as_is(self, tmp_path: Path) -> None:
        """A file path is accepted regardless of its name."""
        report = tmp_path / "anything.txt"
        report.write_text("<coverage/>")

        assert find_coverage_files(report, PATTERN) == [report]

    def test_given_directory_when_find_then_matches_sorted(self, tmp_path: Path) -> None:
        for name in ["CoverageReport_b.xml", "CoverageReport_a.xml", "other.xml"]:
            (tmp_path / name).write_text("")

        result = find_coverage_files(tmp_path, PATTERN)

        assert [p.name for p in result] == ["CoverageReport_a.xml", "CoverageReport_b.xml"]

    def test_given_nested_directory_when_find_then_not_recursive(self, tmp_path: Path) -> None:
        nested = tmp_path / "sub"
        nested.mkdir()
        (nested / "CoverageReport_1.xml").write_text("")

        assert find_coverage_files(tmp_path, PATTERN) == []

    def test_given_directory_matching_pattern_when_find_then_skipped(self, tmp_path: Path) -> None:
        """Only regular files are documents."""
        (tmp_path / "CoverageReport_dir.xml").mkdir()

        assert find_coverage_files(tmp_path, PATTERN) == []

    def test_given_missing_path_when_find_then_empty(self, tmp_path: Path) -> None:
        assert find_coverage_files(tmp_path / "missing", PATTERN) == []


class TestDiscoverDocuments:
    """Tests for discover_documents."""

    def test_given_documents_when_discover_then_returned(self, tmp_path: Path) -> None:
        (tmp_path / "CoverageReport_1.xml").write_text("")

        assert discover_documents(tmp_path, PATTERN) == [tmp_path / "CoverageReport_1.xml"]

    def test_given_no_documents_when_discover_then_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError) as exc_info:
            discover_documents(tmp_path, PATTERN)

        assert exc_info.value.code == ErrorCode.NO_DOCUMENTS
        assert exc_info.value.details == {"path": str(tmp_path)}
