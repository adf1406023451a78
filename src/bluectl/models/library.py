"""Library models: albums from the local music index and player presets."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AlbumEntry:
    """An album from the player's local music index.

    Attributes:
        artist: Album artist as reported by the player.
        title: Album title.
    """

    artist: str
    title: str

    @property
    def sort_key(self) -> str:
        """Return the case-insensitive, trimmed catalog sort key."""
        return (self.artist + self.title).strip().lower()

    @property
    def display_name(self) -> str:
        """Return "artist - title" for display and lookups."""
        if not self.artist:
            return self.title
        return f"{self.artist} - {self.title}"


@dataclass(frozen=True, slots=True)
class PresetEntry:
    """A preset stored on the player.

    Attributes:
        name: Preset display name.
        id: Preset identifier used by the ``Preset`` request.
    """

    name: str
    id: str


def sort_albums(albums: list[AlbumEntry]) -> list[AlbumEntry]:
    """Return albums in catalog order.

    ``sorted`` is stable, so entries with equal keys keep their input order.
    """
    return sorted(albums, key=lambda album: album.sort_key)
