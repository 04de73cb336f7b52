"""Tests for the on-disk language file cache."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from mclocale.exceptions import LocaleParseError
from mclocale.locale.store import ContentStore


def test_read_strings_returns_none_when_not_cached(tmp_path: Path):
    store = ContentStore(tmp_path)
    store.ensure()
    assert store.read_strings("de_de") is None


def test_read_strings_stringifies_non_string_values(tmp_path: Path, locales_dir: Path):
    (locales_dir / "de_de.json").write_text(
        '{"a.b": "Hallo", "count": 3, "flag": true}', encoding="utf-8"
    )
    store = ContentStore(tmp_path)

    assert store.read_strings("de_de") == {"a.b": "Hallo", "count": "3", "flag": "true"}


def test_read_strings_rejects_malformed_json(tmp_path: Path, locales_dir: Path):
    (locales_dir / "de_de.json").write_text('{"a.b": ', encoding="utf-8")
    store = ContentStore(tmp_path)

    with pytest.raises(LocaleParseError):
        store.read_strings("de_de")


def test_read_strings_rejects_non_object(tmp_path: Path, locales_dir: Path):
    (locales_dir / "de_de.json").write_text('["a", "b"]', encoding="utf-8")
    store = ContentStore(tmp_path)

    with pytest.raises(LocaleParseError):
        store.read_strings("de_de")


def test_marker_round_trip(tmp_path: Path):
    store = ContentStore(tmp_path)
    store.ensure()
    assert store.read_marker() is None

    store.write_marker("abc123")
    assert store.marker_path.name == "en_us.hash"
    assert store.read_marker() == "abc123"


def test_file_sha1_matches_hashlib(tmp_path: Path):
    path = tmp_path / "blob.bin"
    payload = b"x" * 200_000
    path.write_bytes(payload)

    assert ContentStore.file_sha1(path) == hashlib.sha1(payload).hexdigest()


def test_paths_live_under_locales_directory(tmp_path: Path):
    store = ContentStore(tmp_path)

    assert store.locale_path("fr_fr") == tmp_path / "locales" / "fr_fr.json"
    assert store.archive_path == tmp_path / "tmp_locale.jar"
