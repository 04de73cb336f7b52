from mclocale.locale.aliases import normalize, to_platform, to_upstream
from mclocale.locale.fetcher import DownloadOutcome, LocaleFetcher
from mclocale.locale.manifest import AssetIndex, ManifestResolver
from mclocale.locale.service import LoadOutcome, MinecraftLocaleService
from mclocale.locale.store import ContentStore
from mclocale.locale.table import LocaleTable

__all__ = [
    "AssetIndex",
    "ContentStore",
    "DownloadOutcome",
    "LoadOutcome",
    "LocaleFetcher",
    "LocaleTable",
    "ManifestResolver",
    "MinecraftLocaleService",
    "normalize",
    "to_platform",
    "to_upstream",
]
