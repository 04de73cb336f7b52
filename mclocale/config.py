"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocaleSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCLOCALE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    data_dir: Path = Field(
        default=Path("."),
        description="Host configuration folder; language files are cached under its locales/ directory.",
    )
    game_version: str = Field(
        default="1.21.4",
        description="Java Edition version id, or the keywords 'release' / 'snapshot'.",
    )
    default_locale: str = "en_us"
    version_manifest_url: AnyHttpUrl = Field(
        default="https://launchermeta.mojang.com/mc/game/version_manifest.json"
    )
    resources_base_url: AnyHttpUrl = Field(default="https://resources.download.minecraft.net")
    request_timeout_seconds: float = Field(default=30.0, gt=0, le=600)
    archive_timeout_seconds: float = Field(default=300.0, gt=0, le=3600)
    manifest_max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)
    preload_locales: list[str] = Field(default_factory=list)
    log_level: str = "INFO"

    @field_validator("default_locale", "game_version", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("default_locale")
    @classmethod
    def _lowercase_locale(cls, value: str) -> str:
        return value.lower()


@lru_cache
def get_settings() -> LocaleSettings:
    """Return cached settings instance."""

    return LocaleSettings()


__all__ = ["LocaleSettings", "get_settings"]
