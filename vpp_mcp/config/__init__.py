"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: ConfigProvider protocol, EnvConfigProvider
Hidden: Environment parsing, defaults, validation

Can be replaced with a different provider (files, a config service) as long as
it returns the same dataclasses.
"""

from .provider import (
    CaptureConfig,
    ConfigProvider,
    DataplaneConfig,
    EnvConfigProvider,
    ExecutionConfig,
    ServerConfig,
)

__all__ = [
    "CaptureConfig",
    "ConfigProvider",
    "DataplaneConfig",
    "EnvConfigProvider",
    "ExecutionConfig",
    "ServerConfig",
]
