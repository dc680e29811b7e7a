"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class DataplaneConfig:
    """Where the Calico/VPP dataplane lives and how to reach it."""
    namespace: str
    vpp_container: str
    agent_container: str
    config_map: str
    interfaces_key: str
    kubectl_binary: str


@dataclass
class ExecutionConfig:
    """Timeouts applied to external calls."""
    command_timeout: float
    kube_api_timeout: float


@dataclass
class CaptureConfig:
    """Packet capture settings."""
    wait_seconds: float
    default_count: int


@dataclass
class ServerConfig:
    """MCP transport configuration."""
    transport: str
    host: str
    port: int
    log_level: str

    @property
    def is_http(self) -> bool:
        """Check if the network transport is selected."""
        return self.transport == "http"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_dataplane_config(self) -> DataplaneConfig:
        """Get dataplane configuration."""
        ...

    def get_execution_config(self) -> ExecutionConfig:
        """Get execution configuration."""
        ...

    def get_capture_config(self) -> CaptureConfig:
        """Get capture configuration."""
        ...

    def get_server_config(self) -> ServerConfig:
        """Get server configuration."""
        ...


VALID_TRANSPORTS = ("stdio", "http")


def _env_number(name: str, default: str, cast=float):
    """Read a numeric environment variable, naming it on failure."""
    raw = os.getenv(name, default)
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_dataplane_config(self) -> DataplaneConfig:
        """Get dataplane configuration from environment variables."""
        return DataplaneConfig(
            namespace=os.getenv("VPP_NAMESPACE", "calico-vpp-dataplane"),
            vpp_container=os.getenv("VPP_CONTAINER", "vpp"),
            agent_container=os.getenv("VPP_AGENT_CONTAINER", "agent"),
            config_map=os.getenv("VPP_CONFIG_MAP", "calico-vpp-config"),
            interfaces_key=os.getenv("VPP_INTERFACES_KEY", "CALICOVPP_INTERFACES"),
            kubectl_binary=os.getenv("KUBECTL_BINARY", "kubectl"),
        )

    def get_execution_config(self) -> ExecutionConfig:
        """Get execution configuration from environment variables."""
        return ExecutionConfig(
            command_timeout=_env_number("COMMAND_TIMEOUT", "10"),
            kube_api_timeout=_env_number("KUBE_API_TIMEOUT", "30"),
        )

    def get_capture_config(self) -> CaptureConfig:
        """Get capture configuration from environment variables."""
        default_count = _env_number("CAPTURE_DEFAULT_COUNT", "500", cast=int)
        if default_count == 0:
            raise ValueError("CAPTURE_DEFAULT_COUNT must be positive")

        return CaptureConfig(
            wait_seconds=_env_number("CAPTURE_WAIT_SECONDS", "15"),
            default_count=default_count,
        )

    def get_server_config(
        self,
        transport: Optional[str] = None,
        port: Optional[int] = None,
        host: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> ServerConfig:
        """
        Get server configuration from environment variables.

        Explicit arguments (usually command-line flags) take precedence.
        """
        transport = transport or os.getenv("MCP_TRANSPORT", "stdio")
        if transport not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid transport mode: {transport}. Use 'stdio' or 'http'"
            )

        return ServerConfig(
            transport=transport,
            host=host or os.getenv("MCP_HOST", "0.0.0.0"),
            port=port if port is not None else _env_number("MCP_PORT", "8080", cast=int),
            log_level=(log_level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        )
