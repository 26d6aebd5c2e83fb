"""
Custom exceptions for strand matching.
Parse, archive and configuration failures each get their own type.
"""

from pathlib import Path


class StrandMatcherError(Exception):
    """Base exception for strand matching errors."""
    pass


class ParseError(StrandMatcherError):
    """Raised when a BIM or strand file line is malformed."""

    def __init__(self, filename: str | Path, line_num: int, reason: str) -> None:
        self.filename = str(filename)
        self.line_num = line_num
        self.reason = reason
        super().__init__(f"{self.filename}, line {line_num}: {reason}")


class ArchiveError(StrandMatcherError):
    """Raised when a strand archive cannot be read or extracted."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ConfigurationError(StrandMatcherError):
    """Raised when there are configuration issues (paths, counts, etc.)."""
    pass
