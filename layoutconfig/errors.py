"""Error codes and error handling utilities for LayoutConfig."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

import yaml


class ErrorCode(Enum):
    """Standardized error codes for LayoutConfig operations."""

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    PATH_INVALID = auto()

    # Catalog errors
    DEVICE_CATALOG_INVALID = auto()
    CONFIG_VARIANT_NOT_FOUND = auto()
    RESOURCES_INVALID = auto()

    # Operation errors
    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.PATH_INVALID: "The specified path is invalid or inaccessible.",

    ErrorCode.DEVICE_CATALOG_INVALID: "The device catalog could not be read. Check its YAML syntax.",
    ErrorCode.CONFIG_VARIANT_NOT_FOUND: "The selected device has no configuration with that name.",
    ErrorCode.RESOURCES_INVALID: "The resource snapshot could not be read.",

    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
}


@dataclass
class LayoutConfigError(Exception):
    """Base exception for LayoutConfig with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass
class NotFoundError(LayoutConfigError):
    """Raised when a device has no configuration variant of the requested name."""

    code: ErrorCode = ErrorCode.CONFIG_VARIANT_NOT_FOUND


def classify_exception(exc: Exception, path: Path | None = None) -> LayoutConfigError:
    """Classify a generic exception into a LayoutConfigError with appropriate code."""
    # core modules import this one, so their exception types load lazily
    from layoutconfig.core.device_loader import DeviceValidationError
    from layoutconfig.core.resource_snapshot import ResourceSnapshotError

    if isinstance(exc, LayoutConfigError):
        return exc
    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return LayoutConfigError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return LayoutConfigError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if isinstance(exc, yaml.YAMLError):
        return LayoutConfigError(ErrorCode.DEVICE_CATALOG_INVALID, path=path, details={"original": exc_str})
    if isinstance(exc, DeviceValidationError):
        return LayoutConfigError(
            ErrorCode.DEVICE_CATALOG_INVALID,
            message=str(exc),
            path=path,
            details={"original": exc_str},
        )
    if isinstance(exc, ResourceSnapshotError):
        return LayoutConfigError(
            ErrorCode.RESOURCES_INVALID,
            message=str(exc),
            path=path,
            details={"original": exc_str},
        )
    if isinstance(exc, OSError):
        return LayoutConfigError(ErrorCode.PATH_INVALID, path=path, details={"original": exc_str})

    return LayoutConfigError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: LayoutConfigError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, LayoutConfigError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        if error.path:
            parts.append(f"\n\nFile: {error.path.name}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
