"""ctlcov error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Coverage input (reading report documents)
- 4xxx: Discovery (locating report documents)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Coverage input (3xxx)
    COVERAGE_UNREADABLE = 3001

    # Discovery (4xxx)
    NO_DOCUMENTS = 4001


@dataclass(frozen=True, slots=True)
class CtlCovError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON log output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CtlCovError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class CoverageReadError(CtlCovError):
    """A coverage report document could not be read.

    Non-fatal: callers skip the document and continue with the rest.
    """

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "CoverageReadError":
        return cls(
            code=ErrorCode.COVERAGE_UNREADABLE,
            message=f"Could not read {path}",
            details={"path": path, "reason": reason},
        )


class DiscoveryError(CtlCovError):
    """No coverage report documents were located."""

    @classmethod
    def no_documents(cls, path: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.NO_DOCUMENTS,
            message=f"No coverage files found in {path}",
            details={"path": path},
        )

