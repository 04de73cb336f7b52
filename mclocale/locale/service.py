"""Minecraft language strings: fetch, cache and look up per locale."""

from __future__ import annotations

import asyncio
from enum import Enum

import httpx

from mclocale.config import LocaleSettings, get_settings
from mclocale.exceptions import LocaleDownloadError, LocaleParseError
from mclocale.locale.aliases import is_valid, to_platform, to_upstream
from mclocale.locale.fetcher import DownloadOutcome, LocaleFetcher
from mclocale.locale.manifest import AssetIndex, ManifestResolver
from mclocale.locale.store import ARCHIVE_LOCALE, ContentStore
from mclocale.locale.table import LocaleTable
from mclocale.logging import logger


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    LOADED_LOCAL_ONLY = "loaded_local_only"
    INVALID_LOCALE = "invalid_locale"
    MISSING_AFTER_DOWNLOAD = "missing_after_download"
    MALFORMED = "malformed"


class MinecraftLocaleService:
    """Owns the asset index, the on-disk cache and the lookup table.

    ``start()`` resolves the asset index in the background and then loads the
    default locale. Other locales are loaded on request through
    ``download_and_load``. ``translate`` may be called at any time and falls back
    to the default locale, then to the key itself.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: LocaleSettings | None = None,
        *,
        store: ContentStore | None = None,
        index: AssetIndex | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or ContentStore(self.settings.data_dir)
        self.index = index if index is not None else AssetIndex()
        self.table = LocaleTable()
        self.resolver = ManifestResolver(http_client, self.settings, self.index)
        self.fetcher = LocaleFetcher(http_client, self.store, self.index, self.settings)
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}
        self._startup: asyncio.Task[LoadOutcome] | None = None

    @property
    def default_locale(self) -> str:
        return self.settings.default_locale

    def init(self) -> None:
        self.store.ensure()

    def start(self) -> asyncio.Task[LoadOutcome]:
        """Schedule asset resolution followed by the default locale load, once."""

        if self._startup is None:
            self.init()
            self._startup = asyncio.create_task(self._startup_sequence(), name="mclocale-startup")
        return self._startup

    async def _startup_sequence(self) -> LoadOutcome:
        await self.resolver.resolve()
        return await self.download_and_load(self.default_locale)

    async def download_and_load(self, locale: str) -> LoadOutcome:
        if not is_valid(locale):
            logger.warning("locale_invalid", locale=locale)
            return LoadOutcome.INVALID_LOCALE
        upstream = to_upstream(locale)
        lock = self._locks.setdefault(upstream, asyncio.Lock())
        self._lock_users[upstream] = self._lock_users.get(upstream, 0) + 1
        try:
            async with lock:
                return await self._download_and_load(upstream)
        finally:
            self._lock_users[upstream] -= 1
            if not self._lock_users[upstream]:
                del self._lock_users[upstream]
                del self._locks[upstream]

    async def _download_and_load(self, locale: str) -> LoadOutcome:
        if locale not in self.index and locale != ARCHIVE_LOCALE:
            # Not published for this game version: only a file already in the cache can serve it.
            try:
                loaded = self.load_locale(locale)
            except LocaleParseError as exc:
                return self._malformed(locale, exc)
            if loaded:
                logger.debug("locale_loaded_locally", locale=locale)
                return LoadOutcome.LOADED_LOCAL_ONLY
            logger.warning("locale_invalid", locale=locale)
            return LoadOutcome.INVALID_LOCALE

        logger.debug("locale_download_and_load", locale=locale)
        outcome = await self._download(locale)
        try:
            loaded = self.load_locale(locale)
        except LocaleParseError as exc:
            return self._malformed(locale, exc)
        if not loaded:
            logger.warning("locale_missing_after_download", locale=locale, download=outcome.value)
            return LoadOutcome.MISSING_AFTER_DOWNLOAD
        return LoadOutcome.LOADED

    async def _download(self, locale: str) -> DownloadOutcome:
        try:
            return await self.fetcher.download(locale)
        except LocaleDownloadError as exc:
            logger.error("locale_download_failed", locale=locale, error=str(exc), exc_info=exc)
        except Exception as exc:
            logger.exception("locale_download_crashed", locale=locale, error=str(exc))
        return DownloadOutcome.FAILED

    def load_locale(self, locale: str) -> bool:
        """Install the cached file for ``locale`` into the table.

        Returns ``False`` if nothing is cached; raises :class:`LocaleParseError`
        if the cached file is unusable. Identifiers that are not plain tokens are
        never looked up on disk.
        """

        if not is_valid(locale):
            return False
        strings = self.store.read_strings(to_upstream(locale))
        if strings is None:
            return False
        self.table.install(to_platform(locale), strings)
        return True

    @staticmethod
    def _malformed(locale: str, exc: LocaleParseError) -> LoadOutcome:
        logger.error("locale_file_malformed", locale=locale, error=str(exc))
        return LoadOutcome.MALFORMED

    def translate(self, key: str, locale: str) -> str:
        strings = self.table.get(to_platform(locale))
        if strings is None:
            strings = self.table.get(to_platform(self.default_locale))
            if strings is None:
                logger.debug("default_locale_missing", locale=self.default_locale)
                return key
        return strings.get(key, key)

    def is_loaded(self, locale: str) -> bool:
        return to_platform(locale) in self.table

    def loaded_locales(self) -> list[str]:
        return self.table.locales()


__all__ = ["LoadOutcome", "MinecraftLocaleService"]
