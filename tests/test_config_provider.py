"""
Unit tests for the environment configuration provider.
"""

import pytest

from vpp_mcp.config import EnvConfigProvider

ENV_VARS = [
    "VPP_NAMESPACE", "VPP_CONTAINER", "VPP_AGENT_CONTAINER", "VPP_CONFIG_MAP",
    "VPP_INTERFACES_KEY", "KUBECTL_BINARY", "COMMAND_TIMEOUT", "KUBE_API_TIMEOUT",
    "CAPTURE_WAIT_SECONDS", "CAPTURE_DEFAULT_COUNT", "MCP_TRANSPORT", "MCP_HOST",
    "MCP_PORT", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the provider reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    """Test values used when nothing is set."""

    def test_dataplane_defaults(self, clean_env):
        config = EnvConfigProvider().get_dataplane_config()
        assert config.namespace == "calico-vpp-dataplane"
        assert config.vpp_container == "vpp"
        assert config.agent_container == "agent"
        assert config.config_map == "calico-vpp-config"
        assert config.interfaces_key == "CALICOVPP_INTERFACES"
        assert config.kubectl_binary == "kubectl"

    def test_execution_defaults(self, clean_env):
        config = EnvConfigProvider().get_execution_config()
        assert config.command_timeout == 10
        assert config.kube_api_timeout == 30

    def test_capture_defaults(self, clean_env):
        config = EnvConfigProvider().get_capture_config()
        assert config.wait_seconds == 15
        assert config.default_count == 500

    def test_server_defaults(self, clean_env):
        config = EnvConfigProvider().get_server_config()
        assert config.transport == "stdio"
        assert not config.is_http
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.log_level == "INFO"


class TestOverrides:
    """Test environment and argument precedence."""

    def test_environment(self, clean_env):
        clean_env.setenv("VPP_NAMESPACE", "vpp-test")
        clean_env.setenv("COMMAND_TIMEOUT", "2.5")
        clean_env.setenv("CAPTURE_DEFAULT_COUNT", "50")
        clean_env.setenv("MCP_TRANSPORT", "http")
        clean_env.setenv("LOG_LEVEL", "debug")

        provider = EnvConfigProvider()

        assert provider.get_dataplane_config().namespace == "vpp-test"
        assert provider.get_execution_config().command_timeout == 2.5
        assert provider.get_capture_config().default_count == 50
        server = provider.get_server_config()
        assert server.is_http
        assert server.log_level == "DEBUG"

    def test_arguments_beat_environment(self, clean_env):
        clean_env.setenv("MCP_TRANSPORT", "http")
        clean_env.setenv("MCP_PORT", "9000")

        server = EnvConfigProvider().get_server_config(transport="stdio", port=8081, host="127.0.0.1")

        assert server.transport == "stdio"
        assert server.port == 8081
        assert server.host == "127.0.0.1"


class TestValidation:
    """Test rejection of unusable values."""

    def test_invalid_transport(self, clean_env):
        with pytest.raises(ValueError, match="Invalid transport mode: sse"):
            EnvConfigProvider().get_server_config(transport="sse")

    def test_non_numeric_timeout(self, clean_env):
        clean_env.setenv("COMMAND_TIMEOUT", "ten")
        with pytest.raises(ValueError, match="COMMAND_TIMEOUT"):
            EnvConfigProvider().get_execution_config()

    def test_negative_wait(self, clean_env):
        clean_env.setenv("CAPTURE_WAIT_SECONDS", "-1")
        with pytest.raises(ValueError, match="CAPTURE_WAIT_SECONDS"):
            EnvConfigProvider().get_capture_config()

    def test_zero_count(self, clean_env):
        clean_env.setenv("CAPTURE_DEFAULT_COUNT", "0")
        with pytest.raises(ValueError, match="CAPTURE_DEFAULT_COUNT"):
            EnvConfigProvider().get_capture_config()

    def test_bad_port(self, clean_env):
        clean_env.setenv("MCP_PORT", "http")
        with pytest.raises(ValueError, match="MCP_PORT"):
            EnvConfigProvider().get_server_config()
