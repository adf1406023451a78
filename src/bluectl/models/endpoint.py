"""Player endpoint model."""

from dataclasses import dataclass

# BluOS HTTP API port
DEFAULT_PORT = 11000


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Network address of a BluOS player.

    Attributes:
        host: Player hostname or IP address.
        port: HTTP API port (default 11000).
    """

    host: str
    port: int = DEFAULT_PORT

    @property
    def address(self) -> str:
        """Return the endpoint address (host:port)."""
        return f"{self.host}:{self.port}"

    @property
    def base_url(self) -> str:
        """Return the HTTP base URL of the player API."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}"

    @classmethod
    def parse(cls, value: str) -> "Endpoint":
        """Parse ``host`` or ``host:port`` into an Endpoint.

        Args:
            value: Address string.

        Returns:
            Endpoint for the address.

        Raises:
            ValueError: If the host is empty or the port is not a number.
        """
        value = value.strip()
        host, sep, port = value.rpartition(":")
        # Bare IPv6 addresses contain colons but no port
        if not sep or (":" in host and not host.startswith("[")):
            host, port = value, ""
        host = host.strip("[]")
        if not host:
            raise ValueError(f"Invalid endpoint: {value!r}")
        if not port:
            return cls(host)
        return cls(host, int(port))
