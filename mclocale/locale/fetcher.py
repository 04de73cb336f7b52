"""Download language files into the content store."""

from __future__ import annotations

import asyncio
import hashlib
import shutil
import zipfile
from enum import Enum
from pathlib import Path

import httpx

from mclocale.config import LocaleSettings
from mclocale.domain.models import Asset
from mclocale.exceptions import ArchiveEntryMissingError, LocaleDownloadError
from mclocale.locale.manifest import AssetIndex
from mclocale.locale.store import ARCHIVE_LOCALE, CHUNK_SIZE, ContentStore
from mclocale.logging import logger

ARCHIVE_ENTRY = f"assets/minecraft/lang/{ARCHIVE_LOCALE}.json"


class DownloadOutcome(str, Enum):
    CACHE_HIT = "cache_hit"
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


class LocaleFetcher:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        store: ContentStore,
        index: AssetIndex,
        settings: LocaleSettings,
    ) -> None:
        self._client = http_client
        self._store = store
        self._index = index
        self._settings = settings

    async def download(self, locale: str) -> DownloadOutcome:
        """Bring the cached file for upstream ``locale`` up to date.

        Raises :class:`LocaleDownloadError` when the file cannot be fetched.
        """

        target = self._store.locale_path(locale)
        if target.exists():
            if locale == ARCHIVE_LOCALE:
                if self._index.client is None:
                    logger.debug("hash_check_skipped", locale=locale, reason="client_download_unknown")
                    return DownloadOutcome.SKIPPED
                current_hash = self._store.read_marker()
                target_hash = self._index.client.sha1
            else:
                asset = self._require_asset(locale)
                current_hash = self._store.file_sha1(target)
                target_hash = asset.hash

            if current_hash == target_hash:
                logger.debug("locale_up_to_date", locale=locale)
                return DownloadOutcome.CACHE_HIT
            logger.debug("locale_out_of_date", locale=locale)

        if locale == ARCHIVE_LOCALE:
            await self._download_from_archive(locale)
        else:
            await self._download_asset(locale, self._require_asset(locale))
        return DownloadOutcome.DOWNLOADED

    def _require_asset(self, locale: str) -> Asset:
        asset = self._index.asset_for(locale)
        if asset is None:
            raise LocaleDownloadError(f"No asset hash known for locale {locale!r}")
        return asset

    def asset_url(self, asset: Asset) -> str:
        base = str(self._settings.resources_base_url).rstrip("/")
        return f"{base}/{asset.shard}/{asset.hash}"

    async def _download_asset(self, locale: str, asset: Asset) -> None:
        partial = self._store.partial_path(locale)
        try:
            digest = await self._stream_to(
                self.asset_url(asset), partial, timeout=self._settings.request_timeout_seconds
            )
            if digest != asset.hash:
                raise LocaleDownloadError(
                    f"Hash mismatch for locale {locale!r}: expected {asset.hash}, got {digest}"
                )
            self._store.commit(partial, self._store.locale_path(locale))
        except (httpx.HTTPError, TimeoutError, OSError) as exc:
            raise LocaleDownloadError(f"Unable to download locale {locale!r}: {exc}") from exc
        finally:
            partial.unlink(missing_ok=True)

    async def _download_from_archive(self, locale: str) -> None:
        client = self._index.client
        if client is None:
            raise LocaleDownloadError("Client archive download is unknown; asset cache unavailable")

        logger.info("default_locale_download_started", locale=locale, size=client.size)
        logger.debug("client_archive_url", url=client.url)
        archive = self._store.archive_path
        partial = self._store.partial_path(locale)
        try:
            digest = await self._stream_to(
                client.url, archive, timeout=self._settings.archive_timeout_seconds
            )
            if digest != client.sha1:
                raise LocaleDownloadError(
                    f"Hash mismatch for client archive: expected {client.sha1}, got {digest}"
                )
            self._extract_entry(archive, partial)
            self._store.commit(partial, self._store.locale_path(locale))
            self._store.write_marker(client.sha1)
        except (httpx.HTTPError, TimeoutError, OSError, zipfile.BadZipFile) as exc:
            raise LocaleDownloadError(f"Unable to extract {locale!r} from client archive: {exc}") from exc
        finally:
            archive.unlink(missing_ok=True)
            partial.unlink(missing_ok=True)
        logger.info("default_locale_download_finished", locale=locale)

    @staticmethod
    def _extract_entry(archive: Path, destination: Path) -> None:
        with zipfile.ZipFile(archive) as jar:
            try:
                source = jar.open(ARCHIVE_ENTRY)
            except KeyError as exc:
                raise ArchiveEntryMissingError(f"Client archive has no {ARCHIVE_ENTRY}") from exc
            with source, destination.open("wb") as out:
                shutil.copyfileobj(source, out, CHUNK_SIZE)

    async def _stream_to(self, url: str, path: Path, *, timeout: float) -> str:
        """Stream ``url`` into ``path`` and return the sha1 of the written bytes."""

        path.parent.mkdir(parents=True, exist_ok=True)
        digest = hashlib.sha1()
        async with asyncio.timeout(timeout):
            async with self._client.stream("GET", url, timeout=timeout) as response:
                response.raise_for_status()
                with path.open("wb") as fp:
                    async for chunk in response.aiter_bytes(CHUNK_SIZE):
                        digest.update(chunk)
                        fp.write(chunk)
        return digest.hexdigest()


__all__ = ["ARCHIVE_ENTRY", "DownloadOutcome", "LocaleFetcher"]
