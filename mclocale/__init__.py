"""Minecraft language file cache and lookup."""

from mclocale.locale import LoadOutcome, MinecraftLocaleService

__all__ = ["LoadOutcome", "MinecraftLocaleService"]
