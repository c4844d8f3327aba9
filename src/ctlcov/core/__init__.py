"""Core module exports."""

from ctlcov.core.errors import (
    ConfigError,
    CoverageReadError,
    CtlCovError,
    DiscoveryError,
    ErrorCode,
)
from ctlcov.core.logging import configure_logging, get_logger
from ctlcov.core.progress import progress, status

__all__ = [
    # Errors
    "ConfigError",
    "CoverageReadError",
    "CtlCovError",
    "DiscoveryError",
    "ErrorCode",
    # Logging
    "configure_logging",
    "get_logger",
    # Progress
    "progress",
    "status",
]
