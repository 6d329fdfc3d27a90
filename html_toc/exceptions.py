"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class HtmlTocError(Exception):
    """Base class for html-toc errors."""


class ParseFileError(HtmlTocError):
    """Raised when an HTML file cannot be read or decoded.

    Args:
        filepath: Path of the offending file.
        reason: Human readable description of the failure.
    """

    def __init__(self, filepath: Path, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}: {reason}")
