"""Exceptions raised while reading an iTunes library export."""

from __future__ import annotations


class LibraryReadError(Exception):
    """Base class for every failure that aborts a library read."""


class LibraryIOError(LibraryReadError):
    pass


class PropertyListParseError(LibraryReadError):
    pass


class LibrarySchemaError(LibraryReadError):
    """A mandatory field is missing or holds a value of the wrong kind."""

    def __init__(self, field: str, expected: str) -> None:
        super().__init__(f"{field}: expected {expected}")
        self.field = field
        self.expected = expected


__all__ = [
    "LibraryIOError",
    "LibraryReadError",
    "LibrarySchemaError",
    "PropertyListParseError",
]
