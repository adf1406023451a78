"""Blocking HTTP transport for the BluOS API."""

import http.client
import logging
import socket
import urllib.error
import urllib.request

from bluectl.api.document import DocumentNode, parse_document
from bluectl.api.protocol import ConfigError, NetworkError, RequestTimeoutError
from bluectl.models.endpoint import Endpoint

logger = logging.getLogger(__name__)

# Request timeout in seconds
DEFAULT_TIMEOUT = 10.0

USER_AGENT = "bluectl/1.0"


class Transport:
    """Issues GET requests against one player and parses the XML replies.

    Example:
        transport = Transport(Endpoint("192.168.1.40"))
        nodes = transport.fetch("Status")
    """

    def __init__(self, endpoint: Endpoint | None, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the transport.

        Args:
            endpoint: Player to talk to, or None if not configured yet.
            timeout: Request timeout in seconds.
        """
        self._endpoint = endpoint
        self._timeout = timeout

    @property
    def endpoint(self) -> Endpoint | None:
        """Return the bound endpoint."""
        return self._endpoint

    @property
    def timeout(self) -> float:
        """Return the request timeout in seconds."""
        return self._timeout

    def url_for(self, path: str) -> str:
        """Return the absolute URL for a relative request path.

        Raises:
            ConfigError: If no endpoint is bound.
        """
        if self._endpoint is None:
            raise ConfigError("No player configured; run 'bluectl use <player>' first")
        return f"{self._endpoint.base_url}/{path.lstrip('/')}"

    def fetch(self, path: str) -> list[DocumentNode]:
        """GET a relative path and parse the response.

        Args:
            path: Resource path plus query string, already percent-encoded.

        Returns:
            Root-level nodes of the response (empty for empty or malformed bodies).

        Raises:
            ConfigError: If no endpoint is bound.
            RequestTimeoutError: If the player does not answer in time.
            NetworkError: If the connection fails or the status is not 2xx.
        """
        url = self.url_for(path)
        logger.debug("GET %s", url)
        return parse_document(self._read(url))

    def _read(self, url: str) -> bytes:
        """Fetch the raw response body (blocking)."""
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                return response.read()
        except urllib.error.HTTPError as e:
            raise NetworkError(f"{url} returned HTTP {e.code}") from e
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise RequestTimeoutError(f"{url} timed out after {self._timeout:g}s") from e
            raise NetworkError(f"Failed to reach {url}: {e.reason}") from e
        except http.client.HTTPException as e:
            raise NetworkError(f"Bad response from {url}: {e!r}") from e
        except (socket.timeout, TimeoutError) as e:
            raise RequestTimeoutError(f"{url} timed out after {self._timeout:g}s") from e
        except OSError as e:
            raise NetworkError(f"Failed to reach {url}: {e}") from e
