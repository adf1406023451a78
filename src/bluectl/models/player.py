"""Discovered player model."""

from dataclasses import dataclass

from bluectl.models.endpoint import Endpoint


@dataclass(frozen=True, slots=True)
class DiscoveredPlayer:
    """A player found on the network and identified by name.

    Attributes:
        name: Player name from ``SyncStatus``.
        endpoint: Where the player answers.
    """

    name: str
    endpoint: Endpoint

    @property
    def display_name(self) -> str:
        """Return name with the address, e.g. "Kitchen (10.0.0.5:11000)"."""
        return f"{self.name} ({self.endpoint.address})"
