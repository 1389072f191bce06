from __future__ import annotations

import importlib

from itunes_library import settings


def _reload():
    return importlib.reload(settings)


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("ITUNES_LIBRARY_MAX_DEPTH", raising=False)
    monkeypatch.delenv("ITUNES_LIBRARY_STRICT", raising=False)
    monkeypatch.delenv("ITUNES_LIBRARY_READ_BUFFER_SIZE", raising=False)

    module = _reload()

    assert module.MAX_DEPTH == 64
    assert module.STRICT is False
    assert module.READ_BUFFER_SIZE == 16 * 1024


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("ITUNES_LIBRARY_MAX_DEPTH", "8")
    monkeypatch.setenv("ITUNES_LIBRARY_STRICT", "yes")
    monkeypatch.setenv("ITUNES_LIBRARY_READ_BUFFER_SIZE", "512")
    try:
        module = _reload()

        assert module.MAX_DEPTH == 8
        assert module.STRICT is True
        assert module.READ_BUFFER_SIZE == 512
    finally:
        monkeypatch.undo()
        _reload()


def test_invalid_int_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("ITUNES_LIBRARY_MAX_DEPTH", "deep")
    try:
        assert _reload().MAX_DEPTH == 64
    finally:
        monkeypatch.undo()
        _reload()
