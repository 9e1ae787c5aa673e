from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal
from urllib.parse import quote


GraphMethod = Literal["GET", "POST", "PATCH", "DELETE", "PUT"]
BETA_VERSION = "beta"


class PolicyCollection(StrEnum):
    """Intune collections that hold the policies this service manages."""

    DEVICE_COMPLIANCE_POLICIES = "deviceCompliancePolicies"
    DEVICE_CONFIGURATIONS = "deviceConfigurations"


@dataclass(slots=True)
class GraphRequest:
    """Structured representation of a Microsoft Graph request."""

    method: GraphMethod
    url: str
    headers: dict[str, str] | None = None
    body: Any | None = None
    api_version: str | None = None


def policy_create_request(
    collection: PolicyCollection,
    body: dict[str, Any],
) -> GraphRequest:
    """POST a new policy into an Intune policy collection."""

    path = f"/deviceManagement/{collection.value}"
    return GraphRequest(
        method="POST",
        url=path,
        body=body,
        api_version=BETA_VERSION,
    )


def policy_assign_request(
    collection: PolicyCollection,
    policy_id: str,
    body: dict[str, Any],
) -> GraphRequest:
    """Build the ``assign`` action request for compliance or configuration policies."""

    path = f"/deviceManagement/{collection.value}/{quote(policy_id, safe='')}/assign"
    return GraphRequest(
        method="POST",
        url=path,
        body=body,
        api_version=BETA_VERSION,
    )


__all__ = [
    "BETA_VERSION",
    "GraphMethod",
    "GraphRequest",
    "PolicyCollection",
    "policy_assign_request",
    "policy_create_request",
]
