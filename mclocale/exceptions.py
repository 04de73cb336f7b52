"""Domain-specific exceptions."""


class LocaleError(Exception):
    pass


class ResolutionError(LocaleError):
    """The version manifest or asset index could not be resolved."""


class LocaleDownloadError(LocaleError):
    pass


class ArchiveEntryMissingError(LocaleDownloadError):
    pass


class LocaleParseError(LocaleError):
    """A cached language file exists but cannot be read as a flat JSON object."""
