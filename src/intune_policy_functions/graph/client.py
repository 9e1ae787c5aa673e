from __future__ import annotations

import json
import shlex
import time
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import Any, Callable, TypeAlias

import httpx

from intune_policy_functions.config.settings import Settings
from intune_policy_functions.graph.errors import (
    AuthenticationError,
    GraphAPIError,
    GraphErrorCategory,
    PermissionError,
    RateLimitError,
)
from intune_policy_functions.graph.requests import GraphRequest
from intune_policy_functions.utils import get_logger


logger = get_logger(__name__)


GRAPH_HOST = "https://graph.microsoft.com"
_CLI_BODY_LIMIT = 800


class GraphAPIVersion(str, Enum):
    V1 = "v1.0"
    BETA = "beta"


ApiVersionInput: TypeAlias = GraphAPIVersion | str | None

_VERSION_ALIASES = {
    "v1": GraphAPIVersion.V1.value,
    "v1.0": GraphAPIVersion.V1.value,
    "1.0": GraphAPIVersion.V1.value,
    "ga": GraphAPIVersion.V1.value,
    "beta": GraphAPIVersion.BETA.value,
}

_STATUS_CATEGORIES = {
    400: GraphErrorCategory.VALIDATION,
    404: GraphErrorCategory.VALIDATION,
    409: GraphErrorCategory.CONFLICT,
}


@dataclass(slots=True)
class GraphTelemetryEvent:
    method: str
    url: str
    status_code: int | None
    duration_ms: float
    category: GraphErrorCategory | None
    success: bool


TelemetryCallback = Callable[[GraphTelemetryEvent], None]


def normalise_api_version(value: GraphAPIVersion | str) -> str:
    if isinstance(value, GraphAPIVersion):
        return value.value
    cleaned = value.strip()
    return _VERSION_ALIASES.get(cleaned.lower(), cleaned)


def error_from_response(response: httpx.Response) -> GraphAPIError:
    """Translate a failed Graph response into the matching ``GraphAPIError``."""

    status = response.status_code
    code, message = _error_details(response)
    message = message or response.text or f"Graph request failed with status {status}"
    retry_after = response.headers.get("Retry-After")

    error: GraphAPIError
    if status == 401:
        error = AuthenticationError(message)
    elif status == 403:
        error = PermissionError(message)
    elif status == 429:
        error = RateLimitError(message, retry_after=retry_after)
    else:
        error = GraphAPIError(
            message=message,
            category=_STATUS_CATEGORIES.get(status, GraphErrorCategory.UNKNOWN),
            status_code=status,
            retry_after=retry_after,
        )
    error.code = code
    return error


def _error_details(response: httpx.Response) -> tuple[str | None, str | None]:
    # Graph wraps failures as {"error": {"code": ..., "message": ...}}
    try:
        body = response.json()
    except ValueError:
        return None, None
    details = body.get("error") if isinstance(body, dict) else None
    if not isinstance(details, dict):
        return None, None
    code = details.get("code")
    message = details.get("message")
    return (
        code if isinstance(code, str) else None,
        message if isinstance(message, str) else None,
    )


def _network_error(exc: httpx.RequestError) -> GraphAPIError:
    if isinstance(exc, httpx.TimeoutException):
        message = "Timed out waiting for Microsoft Graph"
    else:
        message = f"Could not reach Microsoft Graph: {exc}"
    return GraphAPIError(
        message=message,
        category=GraphErrorCategory.NETWORK,
        inner_error=exc,
    )


def az_rest_command(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    body: Any | None = None,
) -> str:
    """Equivalent ``az rest`` invocation for a failed call, minus credentials."""

    parts = ["az", "rest", "--method", method.upper(), "--url", url]
    for name, value in (headers or {}).items():
        if name.lower() == "authorization":
            continue
        parts.extend(["--headers", f"{name}={value}"])
    if body is not None:
        text = json.dumps(body, separators=(",", ":"), default=str)
        if len(text) > _CLI_BODY_LIMIT:
            text = f"{text[: _CLI_BODY_LIMIT - 3]}..."
        parts.extend(["--body", text])
    return shlex.join(parts)


class TelemetryAsyncClient(httpx.AsyncClient):
    """``httpx.AsyncClient`` that raises ``GraphAPIError`` and reports timings.

    Nothing is retried here: throttling and transport failures reach the
    caller on the first attempt.
    """

    def __init__(
        self,
        *args: Any,
        telemetry_callback: TelemetryCallback | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._telemetry_callback = telemetry_callback

    async def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response:
        started = time.perf_counter()
        try:
            response = await super().send(request, **kwargs)
        except httpx.RequestError as exc:
            self._report(request, started, None, GraphErrorCategory.NETWORK)
            raise _network_error(exc) from exc

        if response.is_error:
            await response.aread()
            error = error_from_response(response)
            self._report(request, started, response.status_code, error.category)
            raise error

        self._report(request, started, response.status_code, None)
        return response

    def _report(
        self,
        request: httpx.Request,
        started: float,
        status_code: int | None,
        category: GraphErrorCategory | None,
    ) -> None:
        if self._telemetry_callback is None:
            return
        event = GraphTelemetryEvent(
            method=request.method,
            url=str(request.url),
            status_code=status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
            category=category,
            success=status_code is not None and category is None,
        )
        try:
            self._telemetry_callback(event)
        except Exception:  # pragma: no cover - telemetry must not fail requests
            logger.warning("Telemetry callback raised an exception", exc_info=True)


@dataclass(slots=True)
class GraphClientConfig:
    api_version: GraphAPIVersion | str = GraphAPIVersion.BETA
    user_agent: str = "IntunePolicyFunctions-Python"
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    write_timeout: float = 30.0
    pool_timeout: float = 5.0
    enable_telemetry: bool = True
    telemetry_callback: TelemetryCallback | None = None


class GraphClient:
    """Microsoft Graph client for the policy create and assign calls.

    The bearer token is passed per call because one token, acquired at the
    start of an invocation, is shared by the create and assign requests.
    """

    def __init__(
        self,
        config: GraphClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or GraphClientConfig()
        self._api_version = normalise_api_version(self._config.api_version)
        self._transport = transport
        self._http: TelemetryAsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GraphClient":
        return cls(GraphClientConfig(api_version=settings.graph_api_version))

    @property
    def default_api_version(self) -> str:
        return self._api_version

    async def __aenter__(self) -> "GraphClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        access_token: str,
        json_body: Any | None = None,
        headers: dict[str, str] | None = None,
        api_version: ApiVersionInput = None,
    ) -> httpx.Response:
        url = self.build_url(path, api_version=api_version)
        request_headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
            **(headers or {}),
        }
        try:
            return await self._client().request(
                method, url, json=json_body, headers=request_headers
            )
        except GraphAPIError as exc:
            exc.request_method = method.upper()
            exc.request_url = url
            exc.cli_example = exc.cli_example or az_rest_command(
                method, url, headers=request_headers, body=json_body
            )
            raise

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        access_token: str,
        json_body: Any | None = None,
        headers: dict[str, str] | None = None,
        api_version: ApiVersionInput = None,
    ) -> dict[str, Any]:
        response = await self.request(
            method,
            path,
            access_token=access_token,
            json_body=json_body,
            headers=headers,
            api_version=api_version,
        )
        # assign answers 200 with a body or 204 without one
        if response.status_code == 204 or not response.content:
            return {}
        payload = response.json()
        return payload if isinstance(payload, dict) else {"value": payload}

    async def execute(
        self, request: GraphRequest, *, access_token: str
    ) -> dict[str, Any]:
        return await self.request_json(
            request.method,
            request.url,
            access_token=access_token,
            json_body=request.body,
            headers=request.headers,
            api_version=request.api_version,
        )

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def build_url(self, path: str, *, api_version: ApiVersionInput = None) -> str:
        if path.startswith(("http://", "https://")):
            return path
        relative = "/" + path.strip().strip("/")
        version = (
            normalise_api_version(api_version)
            if api_version is not None
            else self._api_version
        )
        return f"{GRAPH_HOST}/{version}{relative}"

    def _client(self) -> TelemetryAsyncClient:
        if self._http is None:
            callback: TelemetryCallback | None = None
            if self._config.enable_telemetry:
                callback = self._config.telemetry_callback or _log_telemetry
            self._http = TelemetryAsyncClient(
                headers={"User-Agent": self._config.user_agent},
                telemetry_callback=callback,
                transport=self._transport,
                timeout=httpx.Timeout(
                    connect=self._config.connect_timeout,
                    read=self._config.read_timeout,
                    write=self._config.write_timeout,
                    pool=self._config.pool_timeout,
                ),
            )
        return self._http


def _log_telemetry(event: GraphTelemetryEvent) -> None:
    logger.debug(
        "Graph request",
        method=event.method,
        url=event.url,
        status_code=event.status_code,
        duration_ms=round(event.duration_ms, 2),
        success=event.success,
        category=event.category.value if event.category else None,
    )


__all__ = [
    "ApiVersionInput",
    "GraphAPIVersion",
    "GraphClient",
    "GraphClientConfig",
    "GraphTelemetryEvent",
    "TelemetryAsyncClient",
    "az_rest_command",
    "error_from_response",
    "normalise_api_version",
]
