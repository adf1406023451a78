"""Core application logic.

This module holds everything above the HTTP client: persistent settings,
player discovery and the user-level command surface.

Classes:
    ConfigManager: QSettings wrapper for configuration.
    Controller: User-level actions on one player.
    MdnsDiscovery: zeroconf-based player browsing.
"""

from bluectl.core.config import ConfigManager
from bluectl.core.controller import Controller
from bluectl.core.discovery import MdnsDiscovery, discover_players, identify

__all__ = ["ConfigManager", "Controller", "MdnsDiscovery", "discover_players", "identify"]
