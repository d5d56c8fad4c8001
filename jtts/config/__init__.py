"""Configuration module for jtts."""

from jtts.config.settings import (
    AppSettings,
    ClientSettings,
    Environment,
    ProviderConfigurationError,
    ProviderSettings,
    ServerSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ClientSettings",
    "Environment",
    "ProviderConfigurationError",
    "ProviderSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
