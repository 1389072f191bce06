"""Reader settings constants."""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    value = str(os.environ.get(name, "")).strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_flag(name: str, default: bool) -> bool:
    value = str(os.environ.get(name, "")).strip().lower()
    if not value:
        return default
    return value in {"1", "true", "yes", "on"}


# Deepest dict/array nesting accepted before a read is aborted.
MAX_DEPTH = _env_int("ITUNES_LIBRARY_MAX_DEPTH", 64)

# Raise on the first skipped element instead of collecting diagnostics.
STRICT = _env_flag("ITUNES_LIBRARY_STRICT", False)

# Bytes handed to the XML tokenizer per feed.
READ_BUFFER_SIZE = _env_int("ITUNES_LIBRARY_READ_BUFFER_SIZE", 16 * 1024)
