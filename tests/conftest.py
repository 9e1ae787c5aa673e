from __future__ import annotations

from collections.abc import Iterator

import pytest

from intune_policy_functions.utils import LoggingOptions, configure_logging


_ENV_VARS = (
    "TENANT_ID",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "GRAPH_SCOPE",
    "GRAPH_API_VERSION",
    "AUTHORITY_HOST",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture(scope="session", autouse=True)
def _console_logging() -> None:
    """Keep test logging on stderr only so no log files are written."""

    configure_logging(LoggingOptions(level="DEBUG"))


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip service principal variables so host settings never leak into tests."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
