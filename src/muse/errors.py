"""Exception types raised by muse."""

from __future__ import annotations

from typing import Optional


class MuseError(Exception):
    """Base class for all muse errors."""


class ParseError(MuseError, ValueError):
    """Malformed weight log input (header, weight or timestamp).

    Attributes:
        row: 1-based data row that failed, or None for header/stream errors
    """

    def __init__(self, message: str, row: Optional[int] = None):
        if row is not None:
            message = f"row {row}: {message}"
        super().__init__(message)
        self.row = row


class EnvironmentLookupError(MuseError, LookupError):
    """The home directory environment variable is not set."""

    def __init__(self, variable: str):
        super().__init__(f"environment variable '{variable}' is not set")
        self.variable = variable


class PreconditionError(MuseError, ValueError):
    """An operation was called with arguments it cannot accept."""


class ConfigError(MuseError, ValueError):
    """The settings file could not be understood."""


class NoParentDirectoryError(MuseError, OSError):
    """A write target has no parent directory to create."""
