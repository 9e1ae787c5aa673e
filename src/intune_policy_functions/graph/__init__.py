"""Graph client utilities."""

from .client import (
    ApiVersionInput,
    GraphAPIVersion,
    GraphClient,
    GraphClientConfig,
    GraphTelemetryEvent,
)
from .errors import (
    AuthenticationError,
    GraphAPIError,
    GraphErrorCategory,
    PermissionError,
    RateLimitError,
)
from .requests import (
    GraphRequest,
    PolicyCollection,
    policy_assign_request,
    policy_create_request,
)

__all__ = [
    "GraphAPIError",
    "GraphErrorCategory",
    "RateLimitError",
    "AuthenticationError",
    "PermissionError",
    "GraphClient",
    "GraphClientConfig",
    "GraphTelemetryEvent",
    "GraphAPIVersion",
    "ApiVersionInput",
    "GraphRequest",
    "PolicyCollection",
    "policy_assign_request",
    "policy_create_request",
]
