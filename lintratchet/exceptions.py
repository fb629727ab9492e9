"""
Exceptions raised by the lint ratchet.

A regression is not an error: it is reported through the verdict. These
exceptions cover the conditions that abort a run.
"""

from typing import Dict, Optional


class RatchetError(Exception):
    """Base exception for all lint ratchet errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ParseError(RatchetError):
    """A scanned file is not syntactically valid source."""

    def __init__(
        self,
        file_path: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.file_path = file_path
        self.reason = reason
        self.line = line
        self.column = column
        if line is not None:
            location = f"{file_path}:{line}:{column or 1}"
        else:
            location = file_path
        super().__init__(f"Failed to parse {location}: {reason}")


class SourceReadError(RatchetError):
    """A scanned file exists but could not be read."""

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Cannot read {file_path}: {reason}")


class BaselineError(RatchetError):
    """The baseline store could not be read or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Baseline {path}: {reason}")


class ConfigError(RatchetError):
    """A configuration file could not be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Configuration {path}: {reason}")
