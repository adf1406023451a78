"""Tests for the HTTP transport."""

import http.client
import socket
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from bluectl.api.protocol import ConfigError, NetworkError, RequestTimeoutError
from bluectl.api.transport import DEFAULT_TIMEOUT, Transport
from bluectl.models.endpoint import Endpoint


def _response(body: bytes) -> MagicMock:
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    return response


class TestTransport:
    """Tests for Transport."""

    def test_defaults(self) -> None:
        """Test default timeout and endpoint."""
        transport = Transport(Endpoint("10.0.0.5"))
        assert transport.timeout == DEFAULT_TIMEOUT == 10.0
        assert transport.endpoint == Endpoint("10.0.0.5", 11000)

    def test_url_for(self) -> None:
        """Test URLs are built from the endpoint and relative path."""
        transport = Transport(Endpoint("10.0.0.5", 11000))
        assert transport.url_for("Status") == "http://10.0.0.5:11000/Status"
        assert transport.url_for("/Presets") == "http://10.0.0.5:11000/Presets"

    def test_fetch_without_endpoint(self) -> None:
        """Test fetching without an endpoint raises ConfigError."""
        with pytest.raises(ConfigError):
            Transport(None).fetch("Status")

    def test_fetch_parses_body(self) -> None:
        """Test the response body is parsed into nodes."""
        transport = Transport(Endpoint("10.0.0.5"), timeout=3.0)
        with patch(
            "bluectl.api.transport.urllib.request.urlopen",
            return_value=_response(b"<status><state>play</state></status>"),
        ) as mock_open:
            nodes = transport.fetch("Status")

        assert nodes[0].tag == "status"
        request = mock_open.call_args.args[0]
        assert request.full_url == "http://10.0.0.5:11000/Status"
        assert mock_open.call_args.kwargs["timeout"] == 3.0

    def test_fetch_empty_body(self) -> None:
        """Test empty bodies return an empty node list."""
        transport = Transport(Endpoint("10.0.0.5"))
        with patch(
            "bluectl.api.transport.urllib.request.urlopen", return_value=_response(b"")
        ):
            assert transport.fetch("Pause") == []

    def test_http_error(self) -> None:
        """Test non-success statuses raise NetworkError."""
        transport = Transport(Endpoint("10.0.0.5"))
        error = urllib.error.HTTPError("http://x", 500, "Server Error", None, None)
        with (
            patch("bluectl.api.transport.urllib.request.urlopen", side_effect=error),
            pytest.raises(NetworkError, match="HTTP 500"),
        ):
            transport.fetch("Status")

    def test_connection_refused(self) -> None:
        """Test connection failures raise NetworkError."""
        transport = Transport(Endpoint("10.0.0.5"))
        error = urllib.error.URLError(ConnectionRefusedError("refused"))
        with (
            patch("bluectl.api.transport.urllib.request.urlopen", side_effect=error),
            pytest.raises(NetworkError) as excinfo,
        ):
            transport.fetch("Status")
        assert not isinstance(excinfo.value, RequestTimeoutError)

    def test_timeout(self) -> None:
        """Test socket timeouts raise RequestTimeoutError."""
        transport = Transport(Endpoint("10.0.0.5"))
        with (
            patch(
                "bluectl.api.transport.urllib.request.urlopen",
                side_effect=socket.timeout("timed out"),
            ),
            pytest.raises(RequestTimeoutError),
        ):
            transport.fetch("Status")

    def test_wrapped_timeout(self) -> None:
        """Test timeouts wrapped in URLError raise RequestTimeoutError."""
        transport = Transport(Endpoint("10.0.0.5"))
        error = urllib.error.URLError(TimeoutError("timed out"))
        with (
            patch("bluectl.api.transport.urllib.request.urlopen", side_effect=error),
            pytest.raises(RequestTimeoutError),
        ):
            transport.fetch("Status")

    @pytest.mark.parametrize(
        "error",
        [
            http.client.BadStatusLine("SSH-2.0-OpenSSH"),
            http.client.IncompleteRead(b"<status>"),
            http.client.RemoteDisconnected("closed"),
        ],
    )
    def test_malformed_http_response(self, error: Exception) -> None:
        """Test non-HTTP replies raise NetworkError."""
        transport = Transport(Endpoint("10.0.0.5"))
        with (
            patch("bluectl.api.transport.urllib.request.urlopen", side_effect=error),
            pytest.raises(NetworkError, match="10.0.0.5"),
        ):
            transport.fetch("Status")
