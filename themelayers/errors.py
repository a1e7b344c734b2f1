"""Error codes and error handling utilities for ThemeLayers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for ThemeLayers operations."""

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    DISK_FULL = auto()
    PATH_INVALID = auto()

    # Theme errors
    THEME_NOT_FOUND = auto()
    THEME_ID_INVALID = auto()
    MANIFEST_MISSING = auto()
    MANIFEST_INVALID = auto()
    VERSION_MISMATCH = auto()
    NO_PENDING_UPDATES = auto()

    # Operation errors
    OPERATION_CANCELLED = auto()
    OPERATION_FAILED = auto()

    # Configuration errors
    CONFIG_INVALID = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",
    ErrorCode.PATH_INVALID: "The specified path is invalid or inaccessible.",

    ErrorCode.THEME_NOT_FOUND: "The theme was not found in the themes directory.",
    ErrorCode.THEME_ID_INVALID: "Theme ids must be a single folder name.",
    ErrorCode.MANIFEST_MISSING: "Each version folder must include a theme.json file.",
    ErrorCode.MANIFEST_INVALID: "theme.json must contain a JSON object.",
    ErrorCode.VERSION_MISMATCH: "Folder name must match theme.json version.",
    ErrorCode.NO_PENDING_UPDATES: "The theme is already at its newest version.",

    ErrorCode.OPERATION_CANCELLED: "Operation was cancelled by user.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",

    ErrorCode.CONFIG_INVALID: "Configuration is invalid. Reset to defaults?",
}


@dataclass
class ThemeLayerError(Exception):
    """Base exception for ThemeLayers with error code and context."""

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
            parts.append(f"\nPath: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or API responses."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass
class MissingManifestError(ThemeLayerError):
    """An update folder has no readable theme.json."""

    code: ErrorCode = ErrorCode.MANIFEST_MISSING


@dataclass
class VersionMismatchError(ThemeLayerError):
    """An update folder's theme.json declares a different version than its name."""

    code: ErrorCode = ErrorCode.VERSION_MISMATCH


@dataclass
class ThemeNotFoundError(ThemeLayerError):
    code: ErrorCode = ErrorCode.THEME_NOT_FOUND


@dataclass
class InvalidThemeIdError(ThemeLayerError):
    code: ErrorCode = ErrorCode.THEME_ID_INVALID


@dataclass
class NoPendingUpdatesError(ThemeLayerError):
    code: ErrorCode = ErrorCode.NO_PENDING_UPDATES


def classify_exception(exc: Exception, path: Path | None = None) -> ThemeLayerError:
    """Classify a generic exception into a ThemeLayerError with appropriate code."""
    if isinstance(exc, ThemeLayerError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return ThemeLayerError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "access is denied" in exc_str or "permission denied" in exc_str:
        return ThemeLayerError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if "disk full" in exc_str or "no space left" in exc_str:
        return ThemeLayerError(ErrorCode.DISK_FULL, path=path, details={"original": exc_str})
    if "JSONDecodeError" in exc_name:
        return ThemeLayerError(ErrorCode.MANIFEST_INVALID, path=path, details={"original": exc_str})

    return ThemeLayerError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: ThemeLayerError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, ThemeLayerError):
        parts = [error.message]
        if error.suggestion and error.suggestion not in error.message:
            parts.append(f"\n\nHint: {error.suggestion}")
        if error.path:
            parts.append(f"\n\nPath: {error.path}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
