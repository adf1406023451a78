"""Configuration manager using QSettings for persistent storage."""

import logging

from PySide6.QtCore import QSettings

from bluectl.api.protocol import ConfigError
from bluectl.api.transport import DEFAULT_TIMEOUT
from bluectl.core.browse_tool import DEFAULT_BROWSE_TOOL
from bluectl.core.controller import DEFAULT_VOLUME_STEP
from bluectl.models.endpoint import DEFAULT_PORT, Endpoint

logger = logging.getLogger(__name__)

# Player
_KEY_PLAYER_HOST = "player/host"
_KEY_PLAYER_PORT = "player/port"

# Network
_KEY_TIMEOUT = "network/timeout"

# Discovery
_KEY_BROWSE_TOOL = "discovery/tool"

# Controls
_KEY_VOLUME_STEP = "controls/volume_step"


class ConfigManager:
    """Wrapper around QSettings for type-safe config access.

    QSettings stores config in platform-specific locations:
    - Windows: HKEY_CURRENT_USER\\Software\\bluectl\\bluectl
    - macOS: ~/Library/Preferences/com.bluectl.bluectl.plist
    - Linux: ~/.config/bluectl/bluectl.conf

    Example:
        config = ConfigManager()
        config.set_endpoint(Endpoint("192.168.1.40"))
        client = BluOSClient(config.require_endpoint(), config.get_timeout())
    """

    def __init__(self, organization: str = "bluectl", application: str = "bluectl") -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    # -- Player endpoint -------------------------------------------------------

    def get_endpoint(self) -> Endpoint | None:
        """Return the configured player endpoint.

        Returns:
            Endpoint, or None if no player has been selected.
        """
        host = self._settings.value(_KEY_PLAYER_HOST, "", str)
        if not host:
            return None
        port = self._settings.value(_KEY_PLAYER_PORT, DEFAULT_PORT, int)
        try:
            port_num = int(port)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid stored port %r", port)
            port_num = DEFAULT_PORT
        return Endpoint(str(host), max(1, min(65535, port_num)))

    def require_endpoint(self) -> Endpoint:
        """Return the configured endpoint.

        Raises:
            ConfigError: If no player has been selected.
        """
        endpoint = self.get_endpoint()
        if endpoint is None:
            raise ConfigError("No player configured; run 'bluectl use <player>' first")
        return endpoint

    def set_endpoint(self, endpoint: Endpoint) -> None:
        """Persist the player endpoint.

        Args:
            endpoint: Player to use from now on.
        """
        self._settings.setValue(_KEY_PLAYER_HOST, endpoint.host)
        self._settings.setValue(_KEY_PLAYER_PORT, endpoint.port)

    def clear_endpoint(self) -> None:
        """Forget the configured player."""
        self._settings.remove(_KEY_PLAYER_HOST)
        self._settings.remove(_KEY_PLAYER_PORT)

    # -- Network settings ------------------------------------------------------

    def get_timeout(self) -> float:
        """Return the request timeout in seconds.

        Returns:
            Timeout in seconds (default 10, range 1-60).
        """
        value = self._settings.value(_KEY_TIMEOUT, DEFAULT_TIMEOUT, float)
        return max(1.0, min(60.0, float(value)))  # type: ignore[arg-type]

    def set_timeout(self, seconds: float) -> None:
        """Set the request timeout.

        Args:
            seconds: Timeout in seconds (1-60).
        """
        self._settings.setValue(_KEY_TIMEOUT, max(1.0, min(60.0, seconds)))

    # -- Discovery settings ----------------------------------------------------

    def get_browse_tool(self) -> str:
        """Return the service browsing tool name or path.

        Returns:
            Tool name (default "avahi-browse").
        """
        value = self._settings.value(_KEY_BROWSE_TOOL, DEFAULT_BROWSE_TOOL, str)
        return str(value) if value else DEFAULT_BROWSE_TOOL

    def set_browse_tool(self, tool: str) -> None:
        """Set the service browsing tool.

        Args:
            tool: Command name or path, or empty string for the default.
        """
        self._settings.setValue(_KEY_BROWSE_TOOL, tool)

    # -- Control settings ------------------------------------------------------

    def get_volume_step(self) -> int:
        """Return the volume nudge step.

        Returns:
            Step in volume units (default 5, range 1-25).
        """
        value = self._settings.value(_KEY_VOLUME_STEP, DEFAULT_VOLUME_STEP, int)
        return max(1, min(25, int(value)))  # type: ignore[arg-type]

    def set_volume_step(self, step: int) -> None:
        """Set the volume nudge step.

        Args:
            step: Step in volume units (1-25).
        """
        self._settings.setValue(_KEY_VOLUME_STEP, max(1, min(25, step)))

    # -- General settings ------------------------------------------------------

    def clear(self) -> None:
        """Clear all settings (useful for testing or reset)."""
        self._settings.clear()

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
