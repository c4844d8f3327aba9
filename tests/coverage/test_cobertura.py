"""Tests for Cobertura XML export."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from ctlcov.coverage.cobertura import (
    build_cobertura_xml,
    escape_xml,
    fraction,
    write_cobertura,
)
from ctlcov.coverage.models import CoverageModel, FileRecord
from ctlcov.coverage.stats import compute_file_stats


def _model(*records: FileRecord) -> CoverageModel:
    return CoverageModel(files={r.path: r for r in records})


def _parse(xml: str) -> ET.Element:
    return ET.fromstring(xml.encode("utf-8"))


@pytest.fixture
def sample_model() -> CoverageModel:
    foo = FileRecord(
        path="scripts/libs/foo.ctl",
        lines={12: 0, 3: 2, 7: 1},
        functions={"main": 1, "helper": 0},
    )
    foo.add_branches(4, 1)
    bar = FileRecord(path="scripts/bar.ctl", lines={1: 0, 2: 0, 3: 5})
    return _model(foo, bar)


class TestHelpers:
    def test_escape_all_reserved_characters(self) -> None:
        assert escape_xml("""a&b<c>d"e'f""") == "a&amp;b&lt;c&gt;d&quot;e&apos;f"

    @pytest.mark.parametrize(
        ("covered", "total", "expected"),
        [
            (0, 0, "0.0000"),
            (1, 3, "0.3333"),
            (2, 3, "0.6667"),
            (4, 4, "1.0000"),
            (1, 32, "0.0313"),
            (3, 32, "0.0938"),
        ],
    )
    def test_fraction(self, covered: int, total: int, expected: str) -> None:
        assert fraction(covered, total) == expected


class TestBuildCoberturaXml:
    def test_document_header(self, sample_model: CoverageModel) -> None:
        xml = build_cobertura_xml(sample_model, timestamp=1700000000000)
        lines = xml.splitlines()
        assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
        assert lines[1] == (
            '<!DOCTYPE coverage SYSTEM "http://cobertura.sourceforge.net/xml/coverage-04.dtd">'
        )
        assert xml.endswith("</coverage>\n")

    def test_root_totals(self, sample_model: CoverageModel) -> None:
        root = _parse(build_cobertura_xml(sample_model, timestamp=1700000000000))

        assert root.tag == "coverage"
        assert root.get("timestamp") == "1700000000000"
        assert root.get("lines-valid") == "6"
        assert root.get("lines-covered") == "3"
        assert root.get("line-rate") == "0.5000"
        assert root.get("branches-valid") == "4"
        assert root.get("branches-covered") == "1"
        assert root.get("branch-rate") == "0.2500"
        assert root.get("complexity") == "0"

    def test_single_package(self, sample_model: CoverageModel) -> None:
        root = _parse(build_cobertura_xml(sample_model, package_name="Plant_A"))
        packages = root.findall("./packages/package")
        assert len(packages) == 1
        assert packages[0].get("name") == "Plant_A"
        assert packages[0].get("line-rate") == "0.5000"

    def test_classes_sorted_by_path(self, sample_model: CoverageModel) -> None:
        root = _parse(build_cobertura_xml(sample_model))
        classes = root.findall(".//class")
        assert [c.get("filename") for c in classes] == [
            "scripts/bar.ctl",
            "scripts/libs/foo.ctl",
        ]
        assert [c.get("name") for c in classes] == ["bar.ctl", "foo.ctl"]

    def test_class_contents(self, sample_model: CoverageModel) -> None:
        root = _parse(build_cobertura_xml(sample_model))
        foo = root.find(".//class[@filename='scripts/libs/foo.ctl']")
        assert foo is not None

        assert foo.get("line-rate") == "0.6667"
        assert foo.get("branch-rate") == "0.2500"
        methods = {m.get("name"): m.get("line-rate") for m in foo.findall("./methods/method")}
        assert methods == {"helper": "0.0", "main": "1.0"}
        lines = [(ln.get("number"), ln.get("hits")) for ln in foo.findall("./lines/line")]
        assert lines == [("3", "2"), ("7", "1"), ("12", "0")]

    def test_empty_model(self) -> None:
        root = _parse(build_cobertura_xml(CoverageModel()))
        assert root.get("lines-valid") == "0"
        assert root.get("line-rate") == "0.0000"
        assert root.get("branch-rate") == "0.0000"
        assert root.findall(".//class") == []

    def test_reserved_characters_escaped(self) -> None:
        record = FileRecord(path="scripts/a&b's.ctl", functions={'cmp<"x">': 1})
        xml = build_cobertura_xml(_model(record))

        assert "a&amp;b&apos;s.ctl" in xml
        assert "cmp&lt;&quot;x&quot;&gt;" in xml
        root = _parse(xml)
        cls = root.find(".//class")
        assert cls is not None
        assert cls.get("filename") == "scripts/a&b's.ctl"
        method = cls.find("./methods/method")
        assert method is not None
        assert method.get("name") == 'cmp<"x">'

    def test_class_line_rate_matches_stats(self, sample_model: CoverageModel) -> None:
        root = _parse(build_cobertura_xml(sample_model))
        for stat in compute_file_stats(sample_model):
            cls = root.find(f".//class[@filename='{stat.path}']")
            assert cls is not None
            assert float(cls.get("line-rate", "")) == pytest.approx(
                round(stat.line_rate / 100, 4), abs=1e-9
            )


class TestWriteCobertura:
    def test_writes_file(self, sample_model: CoverageModel, tmp_path: Path) -> None:
        out = tmp_path / "cobertura.xml"
        assert write_cobertura(sample_model, out) == out
        assert _parse(out.read_text(encoding="utf-8")).get("lines-valid") == "6"

    def test_overwrites_existing_file(self, sample_model: CoverageModel, tmp_path: Path) -> None:
        out = tmp_path / "cobertura.xml"
        out.write_text("<stale/>" * 1000)

        write_cobertura(sample_model, out)

        content = out.read_text(encoding="utf-8")
        assert "<stale/>" not in content
        assert content.startswith("<?xml")

    def test_missing_directory_propagates(self, sample_model: CoverageModel, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            write_cobertura(sample_model, tmp_path / "missing" / "cobertura.xml")
