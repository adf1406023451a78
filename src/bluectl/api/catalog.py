"""Album catalog built from the player's sectioned album index.

The ``Albums`` resource is partitioned into 27 sections ("#" plus A-Z). A full
catalog therefore costs 27 sequential requests, so it is built once per
client and kept until explicitly invalidated.
"""

import logging
import threading
from collections.abc import Callable

from bluectl.api.protocol import ALBUM_SECTIONS
from bluectl.models.library import AlbumEntry, sort_albums

logger = logging.getLogger(__name__)

SectionLoader = Callable[[str], list[AlbumEntry]]


class AlbumCatalog:
    """Lazily built, sorted album list.

    The first build is serialized by a lock, so concurrent callers trigger
    at most one round of section requests. A failed build leaves the cache
    empty and the next call starts over.

    Example:
        catalog = AlbumCatalog(client.albums_for_section)
        albums = catalog.get()     # 27 requests
        albums = catalog.get()     # cached
        catalog.invalidate()
    """

    def __init__(self, load_section: SectionLoader, sections: str = ALBUM_SECTIONS) -> None:
        """Initialize the catalog.

        Args:
            load_section: Callable returning the albums of one section.
            sections: Section names to request, in order.
        """
        self._load_section = load_section
        self._sections = sections
        self._albums: list[AlbumEntry] | None = None
        self._lock = threading.Lock()

    @property
    def is_cached(self) -> bool:
        """Return True if the catalog has been built."""
        return self._albums is not None

    def get(self) -> list[AlbumEntry]:
        """Return the catalog, building it on first use.

        Raises:
            NetworkError: If any section request fails.
        """
        with self._lock:
            if self._albums is None:
                self._albums = self._build()
            return list(self._albums)

    def invalidate(self) -> None:
        """Drop the cached catalog."""
        with self._lock:
            self._albums = None
        logger.debug("Album catalog invalidated")

    def refresh(self) -> list[AlbumEntry]:
        """Rebuild the catalog from the player and return it."""
        self.invalidate()
        return self.get()

    def _build(self) -> list[AlbumEntry]:
        albums: list[AlbumEntry] = []
        for section in self._sections:
            albums.extend(self._load_section(section))
        logger.info(
            "Built album catalog: %d albums in %d sections", len(albums), len(self._sections)
        )
        return sort_albums(albums)
