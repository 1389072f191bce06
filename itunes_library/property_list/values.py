"""Value model for parsed property-list trees."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PropertyListValue:
    """Base class for every node of a parsed property-list tree."""


@dataclass(frozen=True)
class Integer(PropertyListValue):
    value: int


@dataclass(frozen=True)
class String(PropertyListValue):
    text: str


@dataclass(frozen=True)
class Date(PropertyListValue):
    """Date text kept exactly as it appeared in the document."""

    text: str


@dataclass(frozen=True)
class Boolean(PropertyListValue):
    value: bool


@dataclass(frozen=True)
class Dict(PropertyListValue):
    entries: dict[str, PropertyListValue] = field(default_factory=dict)


@dataclass(frozen=True)
class Array(PropertyListValue):
    items: list[PropertyListValue] = field(default_factory=list)


PropertyListDict = dict[str, PropertyListValue]


def to_int(value: PropertyListValue | None) -> int | None:
    if isinstance(value, Integer):
        return value.value
    return None


def to_string(value: PropertyListValue | None) -> str | None:
    """Return the text of a ``String`` or ``Date`` node, otherwise ``None``."""
    if isinstance(value, (String, Date)):
        return value.text
    return None


def to_dict(value: PropertyListValue | None) -> PropertyListDict | None:
    if isinstance(value, Dict):
        return value.entries
    return None


__all__ = [
    "Array",
    "Boolean",
    "Date",
    "Dict",
    "Integer",
    "PropertyListDict",
    "PropertyListValue",
    "String",
    "to_dict",
    "to_int",
    "to_string",
]
