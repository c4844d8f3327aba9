"""Config module exports."""

from ctlcov.config.loader import load_config
from ctlcov.config.models import (
    CtlCovConfig,
    ExportConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
)

__all__ = [
    "load_config",
    "CtlCovConfig",
    "ExportConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
]
