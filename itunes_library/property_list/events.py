"""Forward-only XML event source for property-list parsing.

Wraps :mod:`xml.dom.pulldom` and reduces its event stream to the handful of
events the property-list reader understands:

- ``StartDocument`` once, before the first element.
- ``StartElement`` / ``EndElement`` with the element's local name.
- ``Characters`` with the full text between two markup events. Chunks split
  by the tokenizer (entity references, CDATA sections, buffer boundaries)
  are joined. With trimming on (the default) the text is stripped and
  whitespace-only runs are dropped; with it off, text is passed through as is.
- ``EndDocument`` once the input is exhausted, and again on every later call.

Tokenizer failures are raised as :class:`PropertyListParseError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Union
from xml.dom import pulldom
from xml.sax import SAXException

from itunes_library.errors import PropertyListParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartDocument:
    pass


@dataclass(frozen=True)
class StartElement:
    name: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class Characters:
    text: str


@dataclass(frozen=True)
class EndDocument:
    pass


XmlEvent = Union[StartDocument, StartElement, EndElement, Characters, EndDocument]

_TEXT_EVENTS = {pulldom.CHARACTERS, pulldom.IGNORABLE_WHITESPACE}


def _local_name(tag_name: str) -> str:
    return tag_name.rpartition(":")[2]


class XmlEventSource:
    """Pull XML events one at a time from a binary stream.

    The source does not own ``stream``; closing it is left to the caller.
    """

    def __init__(self, stream: BinaryIO, *, bufsize: int | None = None, trim_whitespace: bool = True) -> None:
        self._events = pulldom.parse(stream, bufsize=bufsize)
        self._trim_whitespace = trim_whitespace
        self._pending: XmlEvent | None = None
        self._finished = False

    def __iter__(self):
        while True:
            event = self.next()
            yield event
            if isinstance(event, EndDocument):
                return

    def next(self) -> XmlEvent:
        if self._pending is not None:
            event, self._pending = self._pending, None
            return event

        chunks: list[str] = []
        while True:
            event = self._pull()
            if isinstance(event, Characters):
                chunks.append(event.text)
                continue
            if chunks:
                text = "".join(chunks)
                if self._trim_whitespace:
                    text = text.strip()
                if text:
                    self._pending = event
                    return Characters(text)
            return event

    def _pull(self) -> XmlEvent:
        if self._finished:
            return EndDocument()
        try:
            for kind, node in self._events:
                if kind == pulldom.START_ELEMENT:
                    attributes = {name: value for name, value in node.attributes.items()}
                    return StartElement(_local_name(node.tagName), attributes)
                if kind == pulldom.END_ELEMENT:
                    return EndElement(_local_name(node.tagName))
                if kind in _TEXT_EVENTS:
                    return Characters(node.data)
                if kind == pulldom.START_DOCUMENT:
                    return StartDocument()
                logger.debug("Ignoring xml event kind=%s", kind)
        except (SAXException, LookupError) as exc:
            self._finished = True
            raise PropertyListParseError(f"malformed property list: {exc}") from exc
        self._finished = True
        return EndDocument()


__all__ = [
    "Characters",
    "EndDocument",
    "EndElement",
    "StartDocument",
    "StartElement",
    "XmlEvent",
    "XmlEventSource",
]
