"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CTLCOV__SECTION__KEY)
3. Project YAML (./.ctlcov.yaml)
4. Global YAML (~/.config/ctlcov/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    CTLCOV__<SECTION>__<KEY>=<VALUE>

Examples:
    CTLCOV__LOGGING__LEVEL=DEBUG
    CTLCOV__REPORT__PATH_WIDTH=100
    CTLCOV__EXPORT__PACKAGE_NAME=MyProject
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ctlcov.config.constants import DEFAULT_FILE_PATTERN, DEFAULT_PACKAGE_NAME

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CTLCOV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The report itself is not affected.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportConfig(BaseModel):
    """Console report layout and input discovery.

    Env vars:
        CTLCOV__REPORT__TITLE: Heading printed above the report
        CTLCOV__REPORT__PATH_WIDTH: Max characters of a path in the verbose table
        CTLCOV__REPORT__BAR_WIDTH: Cells in the coverage bar
        CTLCOV__REPORT__FILE_PATTERN: Glob for report documents in a directory
    """

    title: str = Field(
        default="WinCC OA Code Coverage Report",
        description="Heading printed between the top rules.",
    )
    path_width: int = Field(
        default=58,
        description="Paths longer than this keep their tail and get an ellipsis prefix.",
    )
    bar_width: int = Field(
        default=50,
        description="Number of cells in the proportional coverage bar.",
    )
    file_pattern: str = Field(
        default=DEFAULT_FILE_PATTERN,
        description="Glob matched against file names when PATH is a directory.",
    )

    @field_validator("path_width")
    @classmethod
    def validate_path_width(cls, v: int) -> int:
        if v < 10:
            raise ValueError(f"path_width must be at least 10, got {v}")
        return v

    @field_validator("bar_width")
    @classmethod
    def validate_bar_width(cls, v: int) -> int:
        if not (1 <= v <= 200):
            raise ValueError(f"bar_width must be 1-200, got {v}")
        return v

    @field_validator("file_pattern")
    @classmethod
    def validate_file_pattern(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("file_pattern must not be empty")
        return v


class ExportConfig(BaseModel):
    """Cobertura export configuration.

    Env vars:
        CTLCOV__EXPORT__PACKAGE_NAME: Name of the single <package> element
    """

    package_name: str = Field(
        default=DEFAULT_PACKAGE_NAME,
        description="Package grouping every file in the exported XML.",
    )


class CtlCovConfig(BaseModel):
    """Root configuration for ctlcov.

    All settings can be configured via:
    1. Environment variables: CTLCOV__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
