"""Controller - user-level actions on one player.

Each action performs one or two requests through ``BluOSClient`` and returns
a short confirmation in the form ``"<player name>: <outcome>"``. Errors are
not caught here; the caller decides how to report them.
"""

import logging

from bluectl.api.client import BluOSClient
from bluectl.api.protocol import clamp_volume

logger = logging.getLogger(__name__)

DEFAULT_VOLUME_STEP = 5

# States in which "toggle" pauses rather than plays
_PLAYING_STATES = frozenset({"play", "stream"})


class Controller:
    """Command surface on top of a BluOSClient.

    Example:
        controller = Controller(BluOSClient(Endpoint("192.168.1.40")))
        print(controller.volume_up())     # "Kitchen: volume 35"
        print(controller.toggle_pause())  # "Kitchen: paused"
    """

    def __init__(self, client: BluOSClient, volume_step: int = DEFAULT_VOLUME_STEP) -> None:
        """Initialize the controller.

        Args:
            client: Client bound to the player to control.
            volume_step: Volume change for volume_up/volume_down.
        """
        self._client = client
        self._volume_step = volume_step
        self._name: str | None = None

    @property
    def client(self) -> BluOSClient:
        """Return the underlying client."""
        return self._client

    def player_name(self) -> str:
        """Return the player name, asking the player once."""
        if self._name is None:
            self._name = self._client.player_name()
        return self._name

    def _confirm(self, outcome: str) -> str:
        message = f"{self.player_name()}: {outcome}"
        logger.debug("Action done: %s", message)
        return message

    def status_line(self) -> str:
        """Describe what is playing."""
        playing = self._client.currently_playing()
        return self._confirm(playing or "nothing playing")

    def set_volume(self, level: int) -> str:
        """Set an absolute volume level."""
        level = clamp_volume(level)
        self._client.set_volume(level)
        return self._confirm(f"volume {level}")

    def nudge_volume(self, delta: int) -> str:
        """Change the volume relative to its current level."""
        return self.set_volume(self._client.volume() + delta)

    def volume_up(self) -> str:
        """Raise the volume by one step."""
        return self.nudge_volume(self._volume_step)

    def volume_down(self) -> str:
        """Lower the volume by one step."""
        return self.nudge_volume(-self._volume_step)

    def toggle_pause(self) -> str:
        """Pause if playing, otherwise resume."""
        if self._client.status().get("state") in _PLAYING_STATES:
            self._client.pause()
            return self._confirm("paused")
        return self.resume()

    def resume(self) -> str:
        """Resume playback."""
        self._client.play()
        return self._confirm("playing")

    def play_url(self, url: str) -> str:
        """Play a stream URL."""
        self._client.play_url(url)
        return self._confirm(f"playing {url}")

    def skip(self) -> str:
        """Skip to the next track."""
        self._client.skip()
        return self._confirm("skipped")

    def back(self) -> str:
        """Go back to the previous track."""
        self._client.back()
        return self._confirm("back")

    def play_album(self, query: str) -> str:
        """Queue and play the album best matching ``query``.

        Raises:
            NotFoundError: If no album matches.
        """
        album = self._client.find_album(query)
        self._client.add_album(album)
        return self._confirm(f"playing {album.display_name}")

    def play_preset(self, name: str) -> str:
        """Load the preset called ``name``.

        Raises:
            NotFoundError: If no preset has that name.
        """
        preset = self._client.find_preset(name)
        self._client.play_preset(preset.id)
        return self._confirm(f"playing preset {preset.name}")

    def list_albums(self) -> list[str]:
        """Return album display names in catalog order."""
        return [album.display_name for album in self._client.albums()]

    def list_presets(self) -> list[str]:
        """Return preset names."""
        return [preset.name for preset in self._client.presets()]
