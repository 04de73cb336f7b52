"""In-memory locale -> (key -> string) table."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


class LocaleTable:
    def __init__(self) -> None:
        self._tables: dict[str, Mapping[str, str]] = {}

    def install(self, locale: str, strings: Mapping[str, str]) -> None:
        # Single assignment: readers holding the old mapping keep a consistent view.
        self._tables[locale] = MappingProxyType(dict(strings))

    def get(self, locale: str) -> Mapping[str, str] | None:
        return self._tables.get(locale)

    def locales(self) -> list[str]:
        return sorted(self._tables)

    def __contains__(self, locale: object) -> bool:
        return locale in self._tables

    def __len__(self) -> int:
        return len(self._tables)


__all__ = ["LocaleTable"]
