from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GraphErrorCategory(str, Enum):
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    UNKNOWN = "unknown"


_RECOVERY_HINTS: dict[GraphErrorCategory, str] = {
    GraphErrorCategory.AUTHENTICATION: (
        "Check CLIENT_SECRET and TENANT_ID for the app registration."
    ),
    GraphErrorCategory.PERMISSION: (
        "Grant DeviceManagementConfiguration.ReadWrite.All as an application "
        "permission and give admin consent."
    ),
    GraphErrorCategory.VALIDATION: (
        "Graph rejected the policy payload or could not find the policy or group."
    ),
    GraphErrorCategory.CONFLICT: "A conflicting policy already exists.",
    GraphErrorCategory.NETWORK: "Check outbound access to graph.microsoft.com.",
}


@dataclass(eq=False)
class GraphAPIError(Exception):
    """Failed Microsoft Graph call, with enough context to reproduce it."""

    message: str
    category: GraphErrorCategory = GraphErrorCategory.UNKNOWN
    status_code: int | None = None
    code: str | None = None
    retry_after: str | None = None
    inner_error: Exception | None = None
    request_method: str | None = None
    request_url: str | None = None
    cli_example: str | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @property
    def recovery_suggestion(self) -> str | None:
        if self.category is GraphErrorCategory.RATE_LIMIT:
            wait = f"after {self.retry_after} seconds" if self.retry_after else "later"
            return f"Graph throttled the request; try again {wait}."
        return _RECOVERY_HINTS.get(self.category)


class AuthenticationError(GraphAPIError):
    def __init__(self, message: str = "Graph rejected the access token") -> None:
        super().__init__(
            message=message,
            category=GraphErrorCategory.AUTHENTICATION,
            status_code=401,
        )


class PermissionError(GraphAPIError):
    def __init__(self, message: str = "Missing Graph application permission") -> None:
        super().__init__(
            message=message,
            category=GraphErrorCategory.PERMISSION,
            status_code=403,
        )


class RateLimitError(GraphAPIError):
    def __init__(
        self, message: str = "Graph throttled the request", retry_after: str | None = None
    ) -> None:
        super().__init__(
            message=message,
            category=GraphErrorCategory.RATE_LIMIT,
            status_code=429,
            retry_after=retry_after,
        )


__all__ = [
    "AuthenticationError",
    "GraphAPIError",
    "GraphErrorCategory",
    "PermissionError",
    "RateLimitError",
]
