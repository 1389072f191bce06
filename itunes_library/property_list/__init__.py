"""Generic Apple XML property-list reader."""

from .reader import Diagnostic, PropertyListReader, parse_property_list, read_property_list
from .values import (
    Array,
    Boolean,
    Date,
    Dict,
    Integer,
    PropertyListDict,
    PropertyListValue,
    String,
    to_dict,
    to_int,
    to_string,
)

__all__ = [
    "Array",
    "Boolean",
    "Date",
    "Diagnostic",
    "Dict",
    "Integer",
    "PropertyListDict",
    "PropertyListReader",
    "PropertyListValue",
    "String",
    "parse_property_list",
    "read_property_list",
    "to_dict",
    "to_int",
    "to_string",
]
