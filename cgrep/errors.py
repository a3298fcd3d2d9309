"""
Error types raised by cgrep.

Per-file read failures are not represented here: the scanner catches the
underlying OSError and drops the file from the result.
"""

from typing import Any, Dict, Optional


class CgrepError(Exception):
    """Base exception for all cgrep errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidCapacity(CgrepError, ValueError):
    """An IndexedSet was asked to hold fewer than one element."""

    def __init__(self, capacity: int):
        super().__init__(
            f"invalid capacity {capacity}: set must be able to hold at least 1 element",
            {"capacity": capacity}
        )
        self.capacity = capacity


class IndexOutOfRange(CgrepError, IndexError):
    """
    An element's index does not fit in the set it was used with.

    Indicates a misconfigured domain (e.g. a set sized smaller than the
    bigram domain) rather than bad user input.
    """

    def __init__(self, index: int, capacity: int):
        super().__init__(
            f"index {index} out of range: capacity = {capacity}",
            {"index": index, "capacity": capacity}
        )
        self.index = index
        self.capacity = capacity


class InvalidBigram(CgrepError, ValueError):
    """A bigram was built from the wrong number of characters or outside the alphabet."""


class NotADirectory(CgrepError, NotADirectoryError):
    """The scan target exists but is not a directory."""

    def __init__(self, path: str):
        super().__init__(f"{path} must be a directory", {"path": path})
        self.filename = path


class ConfigurationError(CgrepError, ValueError):
    """A threshold or configuration value could not be parsed."""
