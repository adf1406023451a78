"""BluOS HTTP protocol helpers.

BluOS players expose a plain HTTP API on port 11000:
- Every request is a GET on a relative path with an optional query string
- Responses are small XML documents
- Values in the query string must be percent-encoded by the caller

This module holds the error hierarchy and the request path builders.
"""

from urllib.parse import quote

# Album index buckets, one request each
ALBUM_SECTIONS = "#ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Separator used when joining status title fields for display
TITLE_SEPARATOR = "  /  "

STATUS = "Status"
SYNC_STATUS = "SyncStatus"
PRESETS = "Presets"
PAUSE = "Pause"
PLAY = "Play"
SKIP = "Skip"
BACK = "Back"

MIN_VOLUME = 0
MAX_VOLUME = 100


class BluOSError(Exception):
    """Base class for all bluectl errors."""


class ConfigError(BluOSError):
    """No player endpoint is configured."""


class NetworkError(BluOSError):
    """A request could not be completed."""


class RequestTimeoutError(NetworkError, TimeoutError):
    """A request did not complete within the timeout."""


class ParseError(BluOSError):
    """A required field is missing or malformed."""


class ToolNotFoundError(BluOSError):
    """The service browsing tool is not installed."""


class NotFoundError(BluOSError):
    """A named album or preset does not exist on the player."""


def encode(value: str | int) -> str:
    """Percent-encode a query string value.

    Args:
        value: Value to encode.

    Returns:
        Encoded value with every reserved character escaped.
    """
    return quote(str(value), safe="")


def build_path(resource: str, **params: str | int) -> str:
    """Build a relative request path with an encoded query string.

    Parameters keep their keyword order, which matters for ``Add`` requests.

    Args:
        resource: Resource name, e.g. "Albums".
        **params: Query parameters.

    Returns:
        Path such as ``Albums?service=LocalMusic&section=%23``.
    """
    if not params:
        return resource
    query = "&".join(f"{key}={encode(value)}" for key, value in params.items())
    return f"{resource}?{query}"


def albums_path(section: str) -> str:
    """Return the request path for one album index section."""
    return build_path("Albums", service="LocalMusic", section=section)


def add_album_path(artist: str, album: str) -> str:
    """Return the request path that queues and plays a local album."""
    return build_path(
        "Add",
        service="LocalMusic",
        playnow=1,
        where="last",
        cursor="last",
        artist=artist,
        album=album,
    )


def clamp_volume(level: int) -> int:
    """Return ``level`` limited to the player's volume range."""
    return max(MIN_VOLUME, min(MAX_VOLUME, level))


def volume_path(level: int) -> str:
    """Return the request path that sets the volume, clamped to 0-100."""
    return build_path("Volume", level=clamp_volume(level))


def play_url_path(url: str) -> str:
    """Return the request path that plays a stream URL."""
    return build_path(PLAY, url=url)


def preset_path(preset_id: str) -> str:
    """Return the request path that loads a preset."""
    return build_path("Preset", id=preset_id)
