"""BluOS player client.

This module turns raw BluOS responses into typed values: status fields, the
player identity, presets and the album catalog. Playback commands are thin
wrappers around single requests.

Example:
    client = BluOSClient(Endpoint("192.168.1.40"))
    print(client.player_name(), client.currently_playing())
    for album in client.albums():
        print(album.display_name)
"""

import logging

from bluectl.api import protocol
from bluectl.api.catalog import AlbumCatalog
from bluectl.api.document import DocumentNode
from bluectl.api.protocol import NotFoundError, ParseError
from bluectl.api.query import node_text, query_all, query_first
from bluectl.api.transport import DEFAULT_TIMEOUT, Transport
from bluectl.models.endpoint import Endpoint
from bluectl.models.library import AlbumEntry, PresetEntry

logger = logging.getLogger(__name__)

# Status fields shown by currently_playing(), in priority order
_TITLE_FIELDS = ("title2", "title3", "title1")

_ALBUM_PATH = ("albums", "sections", "section", "album")
_PRESET_PATH = ("presets", "preset")


class BluOSClient:
    """Synchronous client for one BluOS player.

    The client owns its endpoint and its album catalog cache. Create a new
    client to talk to a different player.

    Attributes:
        endpoint: Player address, or None if not configured.
    """

    def __init__(
        self,
        endpoint: Endpoint | None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Player address, or None if not configured.
            timeout: Request timeout in seconds.
            transport: Transport to use instead of a new one (for tests).
        """
        self._transport = transport or Transport(endpoint, timeout)
        self._catalog = AlbumCatalog(self.albums_for_section)

    @property
    def endpoint(self) -> Endpoint | None:
        """Return the bound endpoint."""
        return self._transport.endpoint

    @property
    def catalog(self) -> AlbumCatalog:
        """Return the album catalog cache."""
        return self._catalog

    def fetch(self, path: str) -> list[DocumentNode]:
        """GET a relative path through the transport."""
        return self._transport.fetch(path)

    # -------------------------------------------------------------------------
    # Status & identity
    # -------------------------------------------------------------------------

    def status(self) -> dict[str, str | None]:
        """Return the current status fields.

        Returns:
            Mapping of field tag (state, volume, title1, ...) to its text, or
            None for fields without text. Empty when the reply is empty.
        """
        root = query_first(["status"], self.fetch(protocol.STATUS))
        if root is None:
            return {}
        return {node.tag: node.text for node in root.nodes}

    def sync_identity(self) -> dict[str, str]:
        """Return the ``SyncStatus`` attributes (name, id, model, ...)."""
        root = query_first(["SyncStatus"], self.fetch(protocol.SYNC_STATUS))
        if root is None:
            return {}
        return dict(root.attributes)

    def player_name(self) -> str:
        """Return the player's name.

        Raises:
            ParseError: If the player did not report a name.
        """
        name = self.sync_identity().get("name")
        if not name:
            raise ParseError("SyncStatus reply has no player name")
        return name

    def volume(self) -> int:
        """Return the current volume level.

        Raises:
            ParseError: If the status has no numeric volume.
        """
        value = self.status().get("volume")
        if value is None:
            raise ParseError("Status reply has no volume")
        try:
            return int(value)
        except ValueError as e:
            raise ParseError(f"Volume is not a number: {value!r}") from e

    def currently_playing(self) -> str:
        """Return a one-line description of what is playing.

        Non-empty fields are joined in the order title2, title3, title1, with
        " (paused)" appended while paused.
        """
        status = self.status()
        text = protocol.TITLE_SEPARATOR.join(
            value for key in _TITLE_FIELDS if (value := status.get(key)) is not None
        )
        if status.get("state") == "pause":
            text = f"{text} (paused)" if text else "(paused)"
        return text

    # -------------------------------------------------------------------------
    # Library
    # -------------------------------------------------------------------------

    def albums_for_section(self, section: str) -> list[AlbumEntry]:
        """Return the albums listed in one index section.

        Args:
            section: A single letter, or "#" for non-alphabetic names.
        """
        nodes = self.fetch(protocol.albums_path(section))
        albums = [
            AlbumEntry(
                artist=node_text(["art"], node.children) or "",
                title=node_text(["title"], node.children) or "",
            )
            for node in query_all(_ALBUM_PATH, nodes)
        ]
        logger.debug("Section %s: %d albums", section, len(albums))
        return albums

    def albums(self) -> list[AlbumEntry]:
        """Return the sorted album catalog, building it on first use."""
        return self._catalog.get()

    def invalidate_albums(self) -> None:
        """Forget the cached album catalog."""
        self._catalog.invalidate()

    def refresh_albums(self) -> list[AlbumEntry]:
        """Rebuild the album catalog from the player."""
        return self._catalog.refresh()

    def find_album(self, query: str) -> AlbumEntry:
        """Find an album by "artist - title" text.

        An exact (case-insensitive) match wins; otherwise the first album
        whose display name contains the query is returned.

        Raises:
            NotFoundError: If no album matches.
        """
        needle = query.strip().lower()
        albums = self.albums()
        for album in albums:
            if album.display_name.lower() == needle:
                return album
        for album in albums:
            if needle and needle in album.display_name.lower():
                return album
        raise NotFoundError(f"No album matching {query!r}")

    def presets(self) -> list[PresetEntry]:
        """Return the presets stored on the player (always re-fetched)."""
        nodes = self.fetch(protocol.PRESETS)
        return [
            PresetEntry(name=node.get("name", "") or "", id=node.get("id", "") or "")
            for node in query_all(_PRESET_PATH, nodes)
        ]

    def find_preset(self, name: str) -> PresetEntry:
        """Find a preset by name (case-insensitive).

        Raises:
            NotFoundError: If no preset has that name.
        """
        wanted = name.strip().lower()
        for preset in self.presets():
            if preset.name.lower() == wanted:
                return preset
        raise NotFoundError(f"No preset named {name!r}")

    # -------------------------------------------------------------------------
    # Playback control
    # -------------------------------------------------------------------------

    def set_volume(self, level: int) -> None:
        """Set the volume (clamped to 0-100)."""
        self.fetch(protocol.volume_path(level))

    def pause(self) -> None:
        """Pause playback."""
        self.fetch(protocol.PAUSE)

    def play(self) -> None:
        """Resume playback."""
        self.fetch(protocol.PLAY)

    def play_url(self, url: str) -> None:
        """Play a stream URL."""
        self.fetch(protocol.play_url_path(url))

    def add_album(self, album: AlbumEntry) -> None:
        """Queue a local album at the end of the playlist and play it."""
        self.fetch(protocol.add_album_path(album.artist, album.title))

    def play_preset(self, preset_id: str) -> None:
        """Load a preset by id."""
        self.fetch(protocol.preset_path(preset_id))

    def skip(self) -> None:
        """Skip to the next track."""
        self.fetch(protocol.SKIP)

    def back(self) -> None:
        """Go back to the previous track."""
        self.fetch(protocol.BACK)
