"""Tests for ConfigManager using QSettings."""

import pytest

from bluectl.api.protocol import ConfigError
from bluectl.core.config import ConfigManager
from bluectl.models.endpoint import Endpoint


@pytest.fixture
def config() -> ConfigManager:
    """Return a fresh ConfigManager for each test."""
    # Use unique organization/app to avoid test interference
    config = ConfigManager("BluectlTest", "TestConfig")
    config.clear()
    return config


class TestConfigManagerEndpoint:
    """Test player endpoint storage."""

    def test_initially_unset(self, config: ConfigManager) -> None:
        """Test that no endpoint is configured initially."""
        assert config.get_endpoint() is None

    def test_require_endpoint_unset(self, config: ConfigManager) -> None:
        """Test require_endpoint raises ConfigError when unset."""
        with pytest.raises(ConfigError):
            config.require_endpoint()

    def test_save_and_load(self, config: ConfigManager) -> None:
        """Test an endpoint round-trips through settings."""
        config.set_endpoint(Endpoint("10.0.0.5", 11010))
        assert config.get_endpoint() == Endpoint("10.0.0.5", 11010)
        assert config.require_endpoint() == Endpoint("10.0.0.5", 11010)

    def test_override(self, config: ConfigManager) -> None:
        """Test setting a new endpoint replaces the old one."""
        config.set_endpoint(Endpoint("10.0.0.5"))
        config.set_endpoint(Endpoint("10.0.0.6"))
        assert config.get_endpoint() == Endpoint("10.0.0.6")

    def test_clear_endpoint(self, config: ConfigManager) -> None:
        """Test clearing the endpoint."""
        config.set_endpoint(Endpoint("10.0.0.5"))
        config.clear_endpoint()
        assert config.get_endpoint() is None


class TestConfigManagerSettings:
    """Test timeout, browse tool and volume step settings."""

    def test_defaults(self, config: ConfigManager) -> None:
        """Test default values."""
        assert config.get_timeout() == 10.0
        assert config.get_browse_tool() == "avahi-browse"
        assert config.get_volume_step() == 5

    def test_timeout_clamped(self, config: ConfigManager) -> None:
        """Test the timeout is clamped to 1-60 seconds."""
        config.set_timeout(2.5)
        assert config.get_timeout() == 2.5
        config.set_timeout(0)
        assert config.get_timeout() == 1.0
        config.set_timeout(500)
        assert config.get_timeout() == 60.0

    def test_browse_tool(self, config: ConfigManager) -> None:
        """Test the browse tool setting and its empty fallback."""
        config.set_browse_tool("/opt/bin/avahi-browse")
        assert config.get_browse_tool() == "/opt/bin/avahi-browse"
        config.set_browse_tool("")
        assert config.get_browse_tool() == "avahi-browse"

    def test_volume_step_clamped(self, config: ConfigManager) -> None:
        """Test the volume step is clamped to 1-25."""
        config.set_volume_step(10)
        assert config.get_volume_step() == 10
        config.set_volume_step(0)
        assert config.get_volume_step() == 1
        config.set_volume_step(99)
        assert config.get_volume_step() == 25

    def test_clear(self, config: ConfigManager) -> None:
        """Test clear resets everything."""
        config.set_endpoint(Endpoint("10.0.0.5"))
        config.set_volume_step(10)
        config.clear()
        assert config.get_endpoint() is None
        assert config.get_volume_step() == 5
