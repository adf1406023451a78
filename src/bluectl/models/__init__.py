"""Data models for BluOS endpoints, albums, presets, and discovered players."""

from bluectl.models.endpoint import Endpoint
from bluectl.models.library import AlbumEntry, PresetEntry, sort_albums
from bluectl.models.player import DiscoveredPlayer

__all__ = [
    "AlbumEntry",
    "DiscoveredPlayer",
    "Endpoint",
    "PresetEntry",
    "sort_albums",
]
