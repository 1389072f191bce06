"""Recursive-descent reader for Apple XML property lists.

The reader walks a single forward-only event stream. ``parse_dict`` hands
every ``<key>`` to ``parse_key_value_pair``, which parses one value with
``parse_value``; that in turn re-enters ``parse_dict`` or ``parse_array`` for
nested containers.

Parsing is lenient. Only a tokenizer failure (malformed XML) or nesting
beyond ``max_depth`` aborts the read. Unknown elements, missing text and
truncated containers are skipped, and each skip is recorded as a
:class:`Diagnostic`. With ``strict=True`` the first diagnostic is raised as
:class:`PropertyListParseError` instead.

Arrays only rebuild ``<dict>`` children; scalar and nested-array children are
skipped. Library exports only nest dicts inside arrays.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO

from itunes_library import settings
from itunes_library.errors import LibraryIOError, PropertyListParseError

from .events import Characters, EndDocument, EndElement, StartDocument, StartElement, XmlEvent, XmlEventSource
from .values import Array, Boolean, Date, Dict, Integer, PropertyListDict, PropertyListValue, String

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Diagnostic:
    """A structural irregularity that was skipped during a lenient parse."""

    kind: str
    element: str
    detail: str = ""


def _parse_int32(text: str) -> int | None:
    if not _INTEGER_RE.fullmatch(text):
        return None
    value = int(text, 10)
    if value < _INT32_MIN or value > _INT32_MAX:
        return None
    return value


def _event_name(event: XmlEvent) -> str:
    if isinstance(event, (StartElement, EndElement)):
        return event.name
    return type(event).__name__


class PropertyListReader:
    def __init__(self, *, strict: bool = False, max_depth: int | None = None) -> None:
        self.strict = strict
        self.max_depth = settings.MAX_DEPTH if max_depth is None else max_depth
        self.diagnostics: list[Diagnostic] = []
        self._events: XmlEventSource | None = None
        self._pushed: XmlEvent | None = None
        self._depth = 0

    def read(self, path: str | PathLike[str]) -> PropertyListDict:
        """Parse the property list stored at ``path``."""
        try:
            with open(path, "rb") as handle:
                return self.parse(handle)
        except OSError as exc:
            raise LibraryIOError(f"unable to read property list: {path}") from exc

    def parse(self, stream: BinaryIO) -> PropertyListDict:
        """Parse the single top-level ``<dict>`` of an open binary stream.

        The rest of the document is drained after the root dict so that a
        malformed tail still fails the read.
        """
        self.diagnostics = []
        self._pushed = None
        self._depth = 0
        self._events = XmlEventSource(stream, bufsize=settings.READ_BUFFER_SIZE)
        try:
            root = self._parse_root()
            self._drain()
        except RecursionError as exc:
            raise PropertyListParseError("property list nesting exceeds the interpreter recursion limit") from exc
        finally:
            self._events = None
        return root

    def parse_dict(self) -> PropertyListDict:
        entries: PropertyListDict = {}
        self._enter("dict")
        try:
            while True:
                event = self._next()
                if isinstance(event, StartElement) and event.name == "key":
                    pair = self.parse_key_value_pair()
                    if pair is not None:
                        key, value = pair
                        entries[key] = value
                elif isinstance(event, EndDocument):
                    break
                elif isinstance(event, EndElement) and event.name == "dict":
                    break
                else:
                    self._skip(event, "dict")
        finally:
            self._depth -= 1
        return entries

    def parse_array(self) -> list[PropertyListValue]:
        items: list[PropertyListValue] = []
        self._enter("array")
        try:
            while True:
                event = self._next()
                if isinstance(event, StartElement) and event.name == "dict":
                    items.append(Dict(self.parse_dict()))
                elif isinstance(event, EndDocument):
                    break
                elif isinstance(event, EndElement) and event.name == "array":
                    break
                elif isinstance(event, StartElement):
                    self._note("unsupported_element", event.name, "only dict elements are read inside an array")
                else:
                    self._skip(event, "array")
        finally:
            self._depth -= 1
        return items

    def parse_key_value_pair(self) -> tuple[str, PropertyListValue] | None:
        key = ""
        event = self._next()
        if isinstance(event, Characters):
            key = event.text
            closing = self._next()
            if not isinstance(closing, EndElement):
                self._note("missing_key_end", _event_name(closing), f"key={key!r}")
                self._unread(closing)
        elif not isinstance(event, EndElement):
            self._note("missing_text", "key")
            self._unread(event)

        value = self.parse_value()
        if value is None:
            return None
        return key, value

    def parse_value(self) -> PropertyListValue | None:
        event = self._next()
        if not isinstance(event, StartElement) or event.name == "key":
            self._note("missing_value", _event_name(event))
            self._unread(event)
            return None

        name = event.name
        if name == "integer":
            text = self.read_text(name)
            if text is None:
                return None
            value = _parse_int32(text)
            if value is None:
                self._note("invalid_integer", name, text)
                return None
            return Integer(value)
        if name == "string":
            text = self.read_text(name)
            return None if text is None else String(text)
        if name == "date":
            text = self.read_text(name)
            return None if text is None else Date(text)
        if name == "true":
            return Boolean(True)
        if name == "false":
            return Boolean(False)
        if name == "dict":
            return Dict(self.parse_dict())
        if name == "array":
            return Array(self.parse_array())

        self._note("unsupported_element", name)
        return None

    def read_text(self, element: str) -> str | None:
        event = self._next()
        if isinstance(event, Characters):
            return event.text
        self._note("missing_text", element)
        self._unread(event)
        return None

    def _parse_root(self) -> PropertyListDict:
        while True:
            event = self._next()
            if isinstance(event, StartElement) and event.name == "dict":
                return self.parse_dict()
            if isinstance(event, EndDocument):
                self._note("missing_root", "dict")
                return {}
            if isinstance(event, StartDocument):
                continue
            if isinstance(event, (StartElement, EndElement)) and event.name == "plist":
                continue
            self._note("unexpected_event", _event_name(event), "before root dict")

    def _drain(self) -> None:
        while not isinstance(self._next(), EndDocument):
            pass

    def _next(self) -> XmlEvent:
        if self._pushed is not None:
            event, self._pushed = self._pushed, None
            return event
        return self._events.next()

    def _unread(self, event: XmlEvent) -> None:
        self._pushed = event

    def _enter(self, container: str) -> None:
        self._depth += 1
        if self._depth > self.max_depth:
            raise PropertyListParseError(f"{container} nesting exceeds max depth {self.max_depth}")

    def _skip(self, event: XmlEvent, container: str) -> None:
        # Closing tags of values that were already read are routine.
        if isinstance(event, EndElement):
            logger.debug("Skipping closing tag name=%s in %s", event.name, container)
        elif isinstance(event, Characters):
            self._note("stray_text", container, event.text)
        else:
            self._note("unexpected_event", _event_name(event), f"in {container}")

    def _note(self, kind: str, element: str, detail: str = "") -> None:
        diagnostic = Diagnostic(kind=kind, element=element, detail=detail)
        if self.strict:
            raise PropertyListParseError(f"{kind}: {element} {detail}".rstrip())
        logger.debug("Property list diagnostic kind=%s element=%s detail=%s", kind, element, detail)
        self.diagnostics.append(diagnostic)


def read_property_list(
    path: str | PathLike[str],
    *,
    strict: bool = False,
    max_depth: int | None = None,
) -> PropertyListDict:
    return PropertyListReader(strict=strict, max_depth=max_depth).read(path)


def parse_property_list(
    stream: BinaryIO,
    *,
    strict: bool = False,
    max_depth: int | None = None,
) -> PropertyListDict:
    return PropertyListReader(strict=strict, max_depth=max_depth).parse(stream)


__all__ = [
    "Diagnostic",
    "PropertyListReader",
    "parse_property_list",
    "read_property_list",
]
