from __future__ import annotations

import io

import pytest

from itunes_library.errors import PropertyListParseError
from itunes_library.property_list.events import (
    Characters,
    EndDocument,
    EndElement,
    StartDocument,
    StartElement,
    XmlEventSource,
)


def _events(payload: bytes, **kwargs) -> list:
    return list(XmlEventSource(io.BytesIO(payload), **kwargs))


def test_event_sequence_drops_whitespace_between_elements() -> None:
    payload = b'<plist version="1.0">\n  <dict>\n    <key> Name </key>\n  </dict>\n</plist>'

    assert _events(payload) == [
        StartDocument(),
        StartElement("plist", {"version": "1.0"}),
        StartElement("dict", {}),
        StartElement("key", {}),
        Characters("Name"),
        EndElement("key"),
        EndElement("dict"),
        EndElement("plist"),
        EndDocument(),
    ]


def test_untrimmed_text_is_kept_verbatim() -> None:
    payload = b"<key> Name </key>"

    events = _events(payload, trim_whitespace=False)

    assert Characters(" Name ") in events


def test_text_split_across_small_buffers_is_joined() -> None:
    payload = b"<string>" + b"abcdefghij" * 20 + b"</string>"

    events = _events(payload, bufsize=7)

    assert Characters("abcdefghij" * 20) in events


def test_namespace_prefix_is_stripped_from_names() -> None:
    payload = b'<p:plist xmlns:p="urn:example"><p:dict/></p:plist>'

    names = [event.name for event in _events(payload) if isinstance(event, StartElement)]

    assert names == ["plist", "dict"]


def test_end_document_repeats_after_exhaustion() -> None:
    source = XmlEventSource(io.BytesIO(b"<plist/>"))
    while not isinstance(source.next(), EndDocument):
        pass

    assert source.next() == EndDocument()
    assert source.next() == EndDocument()


def test_malformed_input_raises_parse_error() -> None:
    with pytest.raises(PropertyListParseError):
        _events(b"<plist><dict></plist>")


def test_untrimmed_whitespace_only_text_is_kept() -> None:
    events = _events(b"<dict>\n  <key>a</key></dict>", trim_whitespace=False)

    assert Characters("\n  ") in events
