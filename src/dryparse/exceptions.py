"""Custom exceptions for dryparse."""

from __future__ import annotations


class DryError(Exception):
    """Base exception for dryparse operations."""


class FilenameError(DryError):
    """The document id or type cannot be derived from the source path."""

    MESSAGE = "Cannot extract id or type from filename."

    def __init__(self, path: str) -> None:
        super().__init__(self.MESSAGE)
        self.path = path
        self.message = self.MESSAGE


class ParseError(DryError):
    """Error during parsing, tied to a line of the source document."""

    def __init__(self, path: str, line: int, message: str) -> None:
        super().__init__(f"{path} line {line}: {message}")
        self.path = path
        self.line = line
        self.message = message


class GrammarError(ParseError):
    """Line matches no valid construct for the current parser state."""


class NamingError(ParseError):
    """Reserved, redefined, reused or malformed name."""


class StructureError(ParseError):
    """Duplicate option, or content found where the block structure forbids it."""


class SourceReadError(DryError, OSError):
    """Source file is missing or unreadable."""
