"""Filesystem cache holding one JSON file per locale."""

from __future__ import annotations

import hashlib
import json
import os
from pathlib import Path

from mclocale.exceptions import LocaleParseError

ARCHIVE_LOCALE = "en_us"
CHUNK_SIZE = 64 * 1024


class ContentStore:
    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.root = self.data_dir / "locales"

    def ensure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def locale_path(self, locale: str) -> Path:
        return self.root / f"{locale}.json"

    def partial_path(self, locale: str) -> Path:
        return self.root / f"{locale}.json.part"

    @property
    def marker_path(self) -> Path:
        return self.root / f"{ARCHIVE_LOCALE}.hash"

    @property
    def archive_path(self) -> Path:
        return self.data_dir / "tmp_locale.jar"

    def read_marker(self) -> str | None:
        """Return the sha1 of the archive the default file was last extracted from."""

        try:
            with self.marker_path.open("r", encoding="utf-8") as fp:
                line = fp.readline().strip()
        except OSError:
            return None
        return line or None

    def write_marker(self, sha1: str) -> None:
        self.marker_path.write_text(sha1, encoding="utf-8")

    @staticmethod
    def file_sha1(path: Path) -> str:
        digest = hashlib.sha1()
        with path.open("rb") as fp:
            for chunk in iter(lambda: fp.read(CHUNK_SIZE), b""):
                digest.update(chunk)
        return digest.hexdigest()

    @staticmethod
    def commit(partial: Path, final: Path) -> None:
        os.replace(partial, final)

    def read_strings(self, locale: str) -> dict[str, str] | None:
        """Parse the cached file for ``locale``.

        Returns ``None`` when nothing is cached. A file that exists but cannot be
        read or is not a flat JSON object raises :class:`LocaleParseError`.
        """

        path = self.locale_path(locale)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fp:
                payload = json.load(fp)
        except (OSError, UnicodeDecodeError) as exc:
            raise LocaleParseError(f"Unable to read locale file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise LocaleParseError(f"Locale file {path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise LocaleParseError(f"Locale file {path} must contain a JSON object")
        return {
            str(key): value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
            for key, value in payload.items()
        }


__all__ = ["ARCHIVE_LOCALE", "ContentStore"]
