"""Custom exceptions for FieldDiff."""

from __future__ import annotations

from typing import Optional


class FieldDiffError(Exception):
    """Base exception for FieldDiff errors."""
    pass


class DocumentParseError(FieldDiffError):
    """Raised when a document is not well-formed JSON."""
    def __init__(
        self,
        source: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Failed to parse JSON from {source}{location}: {reason}")
        self.source = source
        self.reason = reason
        self.line = line
        self.column = column


class DocumentReadError(FieldDiffError):
    """Raised when a document cannot be read from storage."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Error reading JSON file {path}: {reason}")
        self.path = path
        self.reason = reason


class InterruptedComparisonError(FieldDiffError):
    """Raised when a concurrent comparison task was cancelled or interrupted."""
    def __init__(self, message: str = "JSON comparison was interrupted"):
        super().__init__(message)
        self.message = message


class MaxDepthExceededError(FieldDiffError):
    """Raised when maximum traversal depth is exceeded."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class ReportExportError(FieldDiffError):
    """Raised when a report cannot be written."""
    def __init__(self, destination: str, reason: str):
        super().__init__(f"Error writing report to {destination}: {reason}")
        self.destination = destination
        self.reason = reason


class ConfigError(FieldDiffError):
    """Raised when a configuration file or manifest is invalid."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
