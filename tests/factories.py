from __future__ import annotations

import json
from typing import Any

import azure.functions as func
import pytest

from intune_policy_functions.auth import service_principal as service_principal_module
from intune_policy_functions.config.settings import Settings
from intune_policy_functions.handlers.base import PolicyRequestHandler

from tests.stubs import (
    FakeCredentialProvider,
    FakeGraphClient,
    StubConfidentialClientApplication,
)


def make_settings(**overrides: object) -> Settings:
    """Build Settings populated with safe defaults for service principal scenarios."""

    settings = Settings(
        tenant_id="contoso.onmicrosoft.com",
        client_id="00000000-0000-0000-0000-000000000000",
        client_secret="not-a-real-secret",
    )
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def make_http_request(
    body: Any = None,
    *,
    method: str = "POST",
    route: str = "HttpTriggerCreatePolicies",
    raw_body: bytes | None = None,
) -> func.HttpRequest:
    """Build an Azure Functions HTTP request carrying a JSON body."""

    if raw_body is None:
        raw_body = json.dumps(body).encode("utf-8") if body is not None else b""
    return func.HttpRequest(
        method=method,
        url=f"http://localhost:7071/api/{route}",
        headers={"Content-Type": "application/json"},
        params={},
        route_params={},
        body=raw_body,
    )


def make_compliance_response(policy_id: str = "policy-1", **overrides: Any) -> dict[str, Any]:
    """Compliance policy resource as Graph returns it after creation."""

    payload: dict[str, Any] = {
        "@odata.type": "#microsoft.graph.windows10CompliancePolicy",
        "id": policy_id,
        "displayName": "Baseline",
        "description": "desc",
        "createdDateTime": "2024-01-01T00:00:00Z",
        "lastModifiedDateTime": "2024-01-01T00:00:00Z",
        "roleScopeTagIds": ["0"],
    }
    payload.update(overrides)
    return payload


def make_update_ring_response(policy_id: str = "ring-1", **overrides: Any) -> dict[str, Any]:
    """Update ring resource as Graph returns it after creation."""

    payload: dict[str, Any] = {
        "@odata.type": "#microsoft.graph.windowsUpdateForBusinessConfiguration",
        "id": policy_id,
        "displayName": "Ring 1",
        "description": "",
        "createdDateTime": "2024-01-01T00:00:00Z",
        "lastModifiedDateTime": "2024-01-01T00:00:00Z",
        "automaticUpdateMode": "autoInstallAtMaintenanceTime",
        "qualityUpdatesDeferralPeriodInDays": 10,
    }
    payload.update(overrides)
    return payload


def build_handler(
    handler_cls: type[PolicyRequestHandler[Any]],
    *,
    credential: FakeCredentialProvider | None = None,
    client: FakeGraphClient | None = None,
    settings: Settings | None = None,
) -> tuple[PolicyRequestHandler[Any], FakeCredentialProvider, FakeGraphClient]:
    """Wire a handler to fake credential and Graph collaborators."""

    credential = credential or FakeCredentialProvider()
    client = client or FakeGraphClient()
    resolved_settings = settings or make_settings()
    handler = handler_cls(
        settings_loader=lambda: resolved_settings,
        credential_factory=lambda _settings: credential,
        client_factory=lambda _settings: client,
    )
    return handler, credential, client


def install_confidential_client(
    monkeypatch: pytest.MonkeyPatch,
    *,
    results: list[dict[str, Any] | None] | None = None,
) -> list[StubConfidentialClientApplication]:
    """Replace MSAL's confidential client with a stub and return created instances."""

    created: list[StubConfidentialClientApplication] = []

    def _factory(
        client_id: str,
        client_credential: str | None = None,
        authority: str | None = None,
        **_: Any,
    ) -> StubConfidentialClientApplication:
        stub = StubConfidentialClientApplication(
            client_id,
            client_credential,
            authority,
            results=results,
        )
        created.append(stub)
        return stub

    monkeypatch.setattr(
        service_principal_module.msal,
        "ConfidentialClientApplication",
        _factory,
    )
    return created


__all__ = [
    "build_handler",
    "install_confidential_client",
    "make_compliance_response",
    "make_http_request",
    "make_settings",
    "make_update_ring_response",
]
