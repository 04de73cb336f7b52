"""Application entrypoint: warm the language cache for the configured locales."""

from __future__ import annotations

import asyncio

import httpx

from mclocale.config import get_settings
from mclocale.locale import MinecraftLocaleService
from mclocale.logging import configure_logging, logger


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    async with httpx.AsyncClient(follow_redirects=True) as http_client:
        service = MinecraftLocaleService(http_client, settings=settings)
        service.init()
        default_outcome = await service.start()
        logger.info("default_locale_ready", locale=settings.default_locale, outcome=default_outcome.value)

        for locale in settings.preload_locales:
            outcome = await service.download_and_load(locale)
            logger.info("locale_preloaded", locale=locale, outcome=outcome.value)

        logger.info("locale_cache_ready", locales=service.loaded_locales())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
