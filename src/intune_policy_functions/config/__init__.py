"""Configuration helpers for the Intune policy functions."""

from .settings import (
    DEFAULT_GRAPH_API_VERSION,
    DEFAULT_GRAPH_SCOPE,
    Settings,
    SettingsManager,
    default_log_path,
)

__all__ = [
    "DEFAULT_GRAPH_API_VERSION",
    "DEFAULT_GRAPH_SCOPE",
    "Settings",
    "SettingsManager",
    "default_log_path",
]
