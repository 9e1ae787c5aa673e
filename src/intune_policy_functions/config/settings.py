from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_log_dir

APP_NAME = "IntunePolicyFunctions"
ENV_FILE_NAME = ".env"
LOG_FILE_NAME = "intune-policy-functions.log"

DEFAULT_GRAPH_SCOPE = "https://graph.microsoft.com/.default"
DEFAULT_GRAPH_API_VERSION = "beta"
DEFAULT_AUTHORITY_HOST = "https://login.microsoftonline.com"


def log_dir() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False))


def default_log_path() -> Path:
    return log_dir() / LOG_FILE_NAME


@dataclass(slots=True)
class Settings:
    """Service principal and Graph configuration for the policy functions.

    The credentials belong to an Azure AD app registration with application
    permissions ``DeviceManagementConfiguration.ReadWrite.All``. Tokens are
    requested with the client-credentials grant, so a client secret is
    mandatory.
    """

    tenant_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    graph_scope: str = DEFAULT_GRAPH_SCOPE
    graph_api_version: str = DEFAULT_GRAPH_API_VERSION
    authority_host: str = DEFAULT_AUTHORITY_HOST
    log_level: str = "INFO"
    log_file: Path | None = None

    @property
    def is_configured(self) -> bool:
        """True when tenant, client and secret are all present."""
        return bool(self.tenant_id and self.client_id and self.client_secret)

    @property
    def authority(self) -> str:
        tenant = self.tenant_id or "organizations"
        return f"{self.authority_host.rstrip('/')}/{tenant}"

    def scopes(self) -> list[str]:
        return [scope for scope in self.graph_scope.split() if scope]


class SettingsManager:
    """Load settings from the process environment with ``.env`` fallback."""

    def __init__(self, env_file: Path | None = None) -> None:
        self._env_file = env_file or Path.cwd() / ENV_FILE_NAME

    @property
    def env_file(self) -> Path:
        return self._env_file

    def load(self) -> Settings:
        if self._env_file.exists():
            load_dotenv(self._env_file, override=False)

        settings = Settings(
            tenant_id=self._get_env("TENANT_ID"),
            client_id=self._get_env("CLIENT_ID"),
            client_secret=self._get_env("CLIENT_SECRET"),
        )

        scope = self._get_env("GRAPH_SCOPE")
        if scope:
            settings.graph_scope = scope
        api_version = self._get_env("GRAPH_API_VERSION")
        if api_version:
            settings.graph_api_version = api_version
        authority_host = self._get_env("AUTHORITY_HOST")
        if authority_host:
            settings.authority_host = authority_host
        log_level = self._get_env("LOG_LEVEL")
        if log_level:
            settings.log_level = log_level.upper()
        log_file = self._get_env("LOG_FILE")
        if log_file:
            settings.log_file = Path(log_file).expanduser()

        return settings

    def _get_env(self, name: str) -> str | None:
        value = os.getenv(name)
        if value is None:
            return None
        return value.strip() or None


__all__ = [
    "DEFAULT_AUTHORITY_HOST",
    "DEFAULT_GRAPH_API_VERSION",
    "DEFAULT_GRAPH_SCOPE",
    "Settings",
    "SettingsManager",
    "default_log_path",
    "log_dir",
]
