"""Discovery of BluOS players on the local network.

Discovery is best-effort. Candidate endpoints come from a DNS-SD browsing
tool (``avahi-browse``), or from a short zeroconf browse when asked for. Each
candidate is then identified by querying its ``SyncStatus`` name through a
short-lived client of its own.
"""

from __future__ import annotations

import logging
import socket
import threading
from concurrent.futures import ThreadPoolExecutor

from zeroconf import ServiceBrowser, ServiceListener, Zeroconf

from bluectl.api.client import BluOSClient
from bluectl.api.protocol import BluOSError, ParseError
from bluectl.api.transport import DEFAULT_TIMEOUT
from bluectl.core.browse_tool import BROWSE_TIMEOUT, DEFAULT_BROWSE_TOOL, run_browse_tool
from bluectl.models.endpoint import DEFAULT_PORT, Endpoint
from bluectl.models.player import DiscoveredPlayer

logger = logging.getLogger(__name__)

# Resolved records start with "=", other record types are ignored
RESOLVED_RECORD = "="
FIELD_SEPARATOR = ";"
HOST_FIELD = 7
PORT_FIELD = 8

# zeroconf form of the BluOS service type
MDNS_SERVICE_TYPE = "_musc._tcp.local."

# Concurrent identify probes
DEFAULT_MAX_WORKERS = 4


def parse_browse_output(output: str) -> list[Endpoint]:
    """Parse ``avahi-browse --parsable`` output into endpoints.

    Example resolved record:
        ``=;eth0;IPv4;Kitchen;_musc._tcp;local;kitchen.local;10.0.0.5;11000;``

    Args:
        output: Raw tool output.

    Returns:
        Endpoints in output order.

    Raises:
        ParseError: If a resolved record lacks host/port fields or the port
            is not a number.
    """
    endpoints: list[Endpoint] = []
    for line in output.splitlines():
        if not line.startswith(RESOLVED_RECORD):
            continue
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) <= PORT_FIELD:
            raise ParseError(f"Resolved record has too few fields: {line!r}")
        host = fields[HOST_FIELD]
        try:
            port = int(fields[PORT_FIELD])
        except ValueError as e:
            raise ParseError(f"Invalid port in record: {line!r}") from e
        endpoints.append(Endpoint(host, port))
    return endpoints


def discover_endpoints(
    tool: str = DEFAULT_BROWSE_TOOL,
    timeout: float = BROWSE_TIMEOUT,
) -> list[Endpoint]:
    """Run the browsing tool and return candidate endpoints.

    Raises:
        ToolNotFoundError: If the tool is not installed.
        ParseError: If the tool output is malformed.
    """
    endpoints = parse_browse_output(run_browse_tool(tool, timeout=timeout))
    logger.debug("Browse tool reported %d candidate(s)", len(endpoints))
    return endpoints


def identify(endpoint: Endpoint, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the name of the player at ``endpoint``.

    Raises:
        NetworkError: If the player cannot be reached.
        ParseError: If the player does not report a name.
    """
    return BluOSClient(endpoint, timeout=timeout).player_name()


def _try_identify(endpoint: Endpoint, timeout: float) -> DiscoveredPlayer | None:
    try:
        return DiscoveredPlayer(identify(endpoint, timeout), endpoint)
    except BluOSError as e:
        logger.warning("Skipping %s: %s", endpoint.address, e)
        return None


def identify_all(
    endpoints: list[Endpoint],
    timeout: float = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> dict[str, Endpoint]:
    """Identify candidates and map player names to endpoints.

    Unreachable candidates are omitted. When two endpoints report the same
    name (e.g. IPv4 and IPv6 records), the first candidate wins.

    Args:
        endpoints: Candidates to probe.
        timeout: Per-probe request timeout in seconds.
        max_workers: Maximum concurrent probes.

    Returns:
        Name -> endpoint, ordered by name.
    """
    if not endpoints:
        return {}

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        results = list(pool.map(lambda ep: _try_identify(ep, timeout), endpoints))

    players: dict[str, Endpoint] = {}
    for player in results:
        if player is None or player.name in players:
            continue
        logger.info("Found player %s", player.display_name)
        players[player.name] = player.endpoint

    return dict(sorted(players.items(), key=lambda item: item[0].lower()))


def discover_players(
    tool: str = DEFAULT_BROWSE_TOOL,
    timeout: float = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> dict[str, Endpoint]:
    """Discover and identify players with the browsing tool.

    Raises:
        ToolNotFoundError: If the tool is not installed.
    """
    return identify_all(discover_endpoints(tool), timeout=timeout, max_workers=max_workers)


class MusicServiceListener(ServiceListener):
    """Collects BluOS endpoints announced over mDNS."""

    def __init__(self) -> None:
        """Initialize the listener."""
        self._endpoints: dict[str, Endpoint] = {}

    @property
    def endpoints(self) -> list[Endpoint]:
        """Return endpoints found so far."""
        return list(self._endpoints.values())

    def add_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        """Handle service discovery."""
        info = zc.get_service_info(type_, name)
        if info is None:
            logger.debug("Could not get info for service: %s", name)
            return

        for addr in info.addresses:
            try:
                host = socket.inet_ntoa(addr)
            except OSError:
                # IPv4 only
                continue
            self._endpoints[name] = Endpoint(host, info.port or DEFAULT_PORT)
            logger.debug("mDNS announced %s at %s", name, self._endpoints[name].address)
            return

        logger.debug("No IPv4 address for service: %s", name)

    def remove_service(self, zc: Zeroconf, type_: str, name: str) -> None:  # noqa: ARG002
        """Handle service removal."""
        self._endpoints.pop(name, None)

    def update_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        """Handle service update (re-add to refresh info)."""
        self.add_service(zc, type_, name)


class MdnsDiscovery:
    """Browses for BluOS players with zeroconf instead of an external tool.

    Example:
        endpoints = MdnsDiscovery.discover_all(timeout=3.0)
    """

    @staticmethod
    def discover_all(timeout: float = 3.0) -> list[Endpoint]:
        """Collect endpoints announced within ``timeout`` seconds."""
        zeroconf = Zeroconf()
        listener = MusicServiceListener()
        browser = ServiceBrowser(zeroconf, MDNS_SERVICE_TYPE, listener)
        try:
            threading.Event().wait(timeout=timeout)
        finally:
            endpoints = listener.endpoints
            browser.cancel()
            zeroconf.close()
        logger.debug("mDNS browse found %d candidate(s)", len(endpoints))
        return endpoints
