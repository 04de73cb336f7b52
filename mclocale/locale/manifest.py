"""Resolve the asset index and client archive for the configured game version."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from mclocale.config import LocaleSettings
from mclocale.domain.models import Asset, VersionDownload, VersionInfo, VersionManifest
from mclocale.exceptions import ResolutionError
from mclocale.logging import logger
from mclocale.utils.retry import retry_async

LANG_PREFIX = "minecraft/lang/"
LATEST_KEYWORDS = frozenset({"release", "snapshot"})


def asset_key(locale: str) -> str:
    return f"{LANG_PREFIX}{locale}.json"


@dataclass(slots=True)
class AssetIndex:
    """Language assets of one game version plus the client archive descriptor."""

    objects: dict[str, Asset] = field(default_factory=dict)
    client: VersionDownload | None = None

    def asset_for(self, locale: str) -> Asset | None:
        return self.objects.get(asset_key(locale))

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, str) and asset_key(locale) in self.objects


class ManifestResolver:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: LocaleSettings,
        index: AssetIndex | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings
        self.index = index if index is not None else AssetIndex()

    async def resolve(self) -> bool:
        """Populate the index; failures are logged and leave it (partially) empty."""

        try:
            await self.resolve_or_raise()
        except Exception as exc:
            logger.error(
                "asset_cache_failed",
                game_version=self._settings.game_version,
                error=str(exc),
                exc_info=exc.__cause__ or exc,
            )
            return False
        logger.debug(
            "asset_cache_ready",
            game_version=self._settings.game_version,
            locales=len(self.index.objects),
        )
        return True

    async def resolve_or_raise(self) -> None:
        try:
            manifest = VersionManifest.model_validate(
                await self._get_json(str(self._settings.version_manifest_url))
            )
            version_url = self._find_version_url(manifest)
            info = VersionInfo.model_validate(await self._get_json(version_url))

            self.index.client = info.downloads.get("client")
            logger.debug(
                "client_download_resolved",
                client=self.index.client.model_dump() if self.index.client else None,
            )

            assets = await self._get_json(info.asset_index.url)
            objects = assets.get("objects") if isinstance(assets, dict) else None
            if not isinstance(objects, dict):
                raise ResolutionError("Asset index has no objects")
            for path, entry in objects.items():
                if not path.startswith(LANG_PREFIX):
                    continue
                self.index.objects[path] = Asset.model_validate(entry)
        except ResolutionError:
            raise
        except (httpx.HTTPError, TimeoutError, ValidationError, ValueError) as exc:
            raise ResolutionError(f"Unable to build asset cache: {exc}") from exc

    def _find_version_url(self, manifest: VersionManifest) -> str:
        wanted = self._settings.game_version
        if wanted in LATEST_KEYWORDS:
            wanted = getattr(manifest.latest, wanted) or ""
        for version in manifest.versions:
            if version.id == wanted:
                return version.url
        raise ResolutionError(f"Game version {self._settings.game_version!r} not found in version manifest")

    async def _get_json(self, url: str) -> Any:
        timeout = self._settings.request_timeout_seconds

        async def _request():
            async with asyncio.timeout(timeout):
                response = await self._client.get(url, timeout=timeout)
            response.raise_for_status()
            return response

        response = await retry_async(
            _request,
            max_attempts=self._settings.manifest_max_attempts,
            base_delay=self._settings.retry_base_delay,
            retry_on=(httpx.HTTPError, TimeoutError),
            logger=logger,
            operation_name="manifest_fetch",
        )
        return response.json()


__all__ = ["AssetIndex", "LANG_PREFIX", "ManifestResolver", "asset_key"]
