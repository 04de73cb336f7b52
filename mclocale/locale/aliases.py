"""Locale code discrepancies between Java Edition assets and Bedrock clients."""

from __future__ import annotations

import re

LOCALE_PATTERN = re.compile(r"[a-z0-9_]+")

# Bedrock name -> Java Edition asset name.
UPSTREAM_ALIASES: dict[str, str] = {"nb_no": "no_no"}
PLATFORM_ALIASES: dict[str, str] = {upstream: platform for platform, upstream in UPSTREAM_ALIASES.items()}


def normalize(locale: str) -> str:
    return locale.strip().lower()


def is_valid(locale: str) -> bool:
    """Whether ``locale`` is a plain token usable as a cache file name."""

    return LOCALE_PATTERN.fullmatch(normalize(locale)) is not None


def to_upstream(locale: str) -> str:
    """Name under which the asset index and the cache directory know ``locale``."""

    code = normalize(locale)
    return UPSTREAM_ALIASES.get(code, code)


def to_platform(locale: str) -> str:
    """Name under which ``locale`` is installed in the lookup table."""

    code = normalize(locale)
    return PLATFORM_ALIASES.get(code, code)


__all__ = ["LOCALE_PATTERN", "PLATFORM_ALIASES", "UPSTREAM_ALIASES", "is_valid", "normalize", "to_platform", "to_upstream"]
