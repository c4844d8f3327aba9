"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ReportConfig model
- ExportConfig model
- CtlCovConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ctlcov.config.models import (
    CtlCovConfig,
    ExportConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_absolute_path_destination(self) -> None:
        """Absolute path is valid destination."""
        config = LogOutputConfig(destination="/var/log/ctlcov.log")
        assert config.destination == "/var/log/ctlcov.log"

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/ctlcov.log")


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        """Warnings only, to stderr."""
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestReportConfig:
    """Tests for ReportConfig model."""

    def test_defaults(self) -> None:
        config = ReportConfig()
        assert config.title == "WinCC OA Code Coverage Report"
        assert config.path_width == 58
        assert config.bar_width == 50
        assert config.file_pattern == "CoverageReport_*.xml"

    @pytest.mark.parametrize("width", [0, 9, -1])
    def test_path_width_too_small(self, width: int) -> None:
        with pytest.raises(ValidationError, match="path_width"):
            ReportConfig(path_width=width)

    @pytest.mark.parametrize("width", [0, 201])
    def test_bar_width_out_of_range(self, width: int) -> None:
        with pytest.raises(ValidationError, match="bar_width"):
            ReportConfig(bar_width=width)

    def test_bar_width_bounds_accepted(self) -> None:
        assert ReportConfig(bar_width=1).bar_width == 1
        assert ReportConfig(bar_width=200).bar_width == 200

    def test_empty_pattern_rejected(self) -> None:
        with pytest.raises(ValidationError, match="file_pattern"):
            ReportConfig(file_pattern="  ")


class TestCtlCovConfig:
    """Tests for the root model."""

    def test_sections_default(self) -> None:
        config = CtlCovConfig()
        assert config.report == ReportConfig()
        assert config.export == ExportConfig()
        assert config.export.package_name == "WinCC_OA"

    def test_nested_dict_input(self) -> None:
        config = CtlCovConfig.model_validate({"report": {"bar_width": 20}})
        assert config.report.bar_width == 20
        assert config.report.path_width == 58
