"""Typed records for an iTunes library export."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable

from itunes_library import settings
from itunes_library.errors import LibrarySchemaError
from itunes_library.property_list import (
    Diagnostic,
    Dict,
    PropertyListDict,
    PropertyListReader,
    to_int,
    to_string,
)

logger = logging.getLogger(__name__)


def _require_int(entries: PropertyListDict, field_name: str) -> int:
    value = to_int(entries.get(field_name))
    if value is None:
        raise LibrarySchemaError(field_name, "integer")
    return value


def _require_string(entries: PropertyListDict, field_name: str) -> str:
    value = to_string(entries.get(field_name))
    if value is None:
        raise LibrarySchemaError(field_name, "string")
    return value


@dataclass(frozen=True)
class Version:
    major: int
    minor: int


@dataclass(frozen=True)
class ItunesTrack:
    id: int
    name: str
    artist: str | None = None
    album: str | None = None

    @classmethod
    def from_dict(cls, entries: PropertyListDict) -> ItunesTrack:
        """Build a track from its property-list dict.

        ``Track ID`` and ``Name`` are mandatory and raise
        :class:`LibrarySchemaError` when missing or mistyped.
        """
        return cls(
            id=_require_int(entries, "Track ID"),
            name=_require_string(entries, "Name"),
            artist=to_string(entries.get("Artist")),
            album=to_string(entries.get("Album")),
        )


@dataclass(frozen=True)
class ItunesPlaylist:
    id: int


@dataclass(frozen=True)
class ItunesLibrary:
    """An iTunes library export.

    ``playlists`` is always empty; playlist entries are not read.
    ``diagnostics`` lists what the lenient parse skipped.
    """

    version: Version
    application_version: str | None = None
    date: str | None = None
    music_folder: str | None = None
    tracks: list[ItunesTrack] = field(default_factory=list)
    playlists: list[ItunesPlaylist] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def read(cls, path: str | PathLike[str], *, strict: bool | None = None) -> ItunesLibrary:
        """Read and convert the library export at ``path``.

        Raises :class:`LibraryIOError` when the file cannot be read,
        :class:`PropertyListParseError` for malformed XML, and
        :class:`LibrarySchemaError` when a mandatory field is missing or
        mistyped. No partial library is returned.
        """
        if strict is None:
            strict = settings.STRICT
        reader = PropertyListReader(strict=strict)
        entries = reader.read(path)
        library = cls.from_dict(entries, diagnostics=reader.diagnostics)
        logger.info(
            "Read iTunes library path=%s tracks=%d diagnostics=%d",
            path,
            len(library.tracks),
            len(library.diagnostics),
        )
        return library

    @classmethod
    def from_dict(cls, entries: PropertyListDict, *, diagnostics: Iterable[Diagnostic] = ()) -> ItunesLibrary:
        return cls(
            version=Version(
                major=_require_int(entries, "Major Version"),
                minor=_require_int(entries, "Minor Version"),
            ),
            application_version=to_string(entries.get("Application Version")),
            date=to_string(entries.get("Date")),
            music_folder=to_string(entries.get("Music Folder")),
            tracks=_tracks_from_dict(entries),
            diagnostics=list(diagnostics),
        )


def _tracks_from_dict(entries: PropertyListDict) -> list[ItunesTrack]:
    tracks_value = entries.get("Tracks")
    if not isinstance(tracks_value, Dict):
        return []

    tracks: list[ItunesTrack] = []
    for key, track_value in tracks_value.entries.items():
        if not isinstance(track_value, Dict):
            raise LibrarySchemaError(f"Tracks/{key}", "dict")
        try:
            tracks.append(ItunesTrack.from_dict(track_value.entries))
        except LibrarySchemaError as exc:
            raise LibrarySchemaError(f"Tracks/{key}/{exc.field}", exc.expected) from exc
    return tracks


__all__ = ["ItunesLibrary", "ItunesPlaylist", "ItunesTrack", "Version"]
