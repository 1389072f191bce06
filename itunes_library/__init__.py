"""Reader for iTunes ``Library.xml`` exports."""

from itunes_library.errors import LibraryIOError, LibraryReadError, LibrarySchemaError, PropertyListParseError
from itunes_library.library import ItunesLibrary, ItunesPlaylist, ItunesTrack, Version
from itunes_library.property_list import Diagnostic

__all__ = [
    "Diagnostic",
    "ItunesLibrary",
    "ItunesPlaylist",
    "ItunesTrack",
    "LibraryIOError",
    "LibraryReadError",
    "LibrarySchemaError",
    "PropertyListParseError",
    "Version",
]
