"""Pydantic models for the launcher metadata documents."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LatestVersion(_Document):
    release: str | None = None
    snapshot: str | None = None


class VersionEntry(_Document):
    id: str
    url: str
    type: str | None = None
    time: str | None = None
    release_time: str | None = Field(default=None, alias="releaseTime")


class VersionManifest(_Document):
    latest: LatestVersion = Field(default_factory=LatestVersion)
    versions: list[VersionEntry] = Field(default_factory=list)


class VersionDownload(_Document):
    """Archive descriptor the default language file is extracted from."""

    sha1: str
    size: int = 0
    url: str


class AssetIndexRef(_Document):
    id: str | None = None
    sha1: str | None = None
    size: int = 0
    total_size: int = Field(default=0, alias="totalSize")
    url: str


class VersionInfo(_Document):
    id: str | None = None
    type: str | None = None
    asset_index: AssetIndexRef = Field(alias="assetIndex")
    downloads: dict[str, VersionDownload] = Field(default_factory=dict)


class Asset(_Document):
    hash: str
    size: int = 0

    @property
    def shard(self) -> str:
        return self.hash[:2]


__all__ = [
    "Asset",
    "AssetIndexRef",
    "LatestVersion",
    "VersionDownload",
    "VersionEntry",
    "VersionInfo",
    "VersionManifest",
]
