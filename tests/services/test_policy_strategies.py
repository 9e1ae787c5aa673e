from __future__ import annotations

import httpx
import pytest

from intune_policy_functions.errors import AssignError, CreateError
from intune_policy_functions.graph import GraphAPIError, GraphErrorCategory, PolicyCollection
from intune_policy_functions.models import (
    AssignmentAcknowledgement,
    CreatedCompliancePolicy,
    CreatedUpdateRingPolicy,
)
from intune_policy_functions.services import (
    AssignPolicyToGroupStrategy,
    CompliancePolicyStrategy,
    WindowsUpdateForBusinessPolicyStrategy,
)

from tests.factories import make_compliance_response, make_update_ring_response
from tests.stubs import FakeGraphClient


@pytest.mark.asyncio
async def test_compliance_strategy_posts_template() -> None:
    client = FakeGraphClient(
        {"/deviceCompliancePolicies": make_compliance_response("policy-1")}
    )
    strategy = CompliancePolicyStrategy(client)

    result = await strategy.create_policy("token", "Baseline", "desc")

    assert result.status == 201
    assert isinstance(result.body, CreatedCompliancePolicy)
    assert result.body.id == "policy-1"
    ((request, token),) = client.requests
    assert token == "token"
    assert request.method == "POST"
    assert request.url == "/deviceManagement/deviceCompliancePolicies"
    assert request.api_version == "beta"
    assert request.body["displayName"] == "Baseline"
    assert request.body["description"] == "desc"
    assert request.body["@odata.type"] == "#microsoft.graph.windows10CompliancePolicy"


@pytest.mark.asyncio
async def test_update_ring_strategy_posts_to_device_configurations() -> None:
    client = FakeGraphClient(
        {"/deviceConfigurations": make_update_ring_response("ring-1")}
    )
    strategy = WindowsUpdateForBusinessPolicyStrategy(client)

    result = await strategy.create_policy("token", "Ring 1", "")

    assert strategy.collection is PolicyCollection.DEVICE_CONFIGURATIONS
    assert isinstance(result.body, CreatedUpdateRingPolicy)
    assert result.body.id == "ring-1"
    ((request, _),) = client.requests
    assert request.url == "/deviceManagement/deviceConfigurations"
    assert request.body["engagedRestartDeadlineInDays"] is None


@pytest.mark.asyncio
async def test_create_wraps_graph_errors() -> None:
    failure = GraphAPIError(
        message="Invalid policy",
        category=GraphErrorCategory.VALIDATION,
        status_code=400,
    )
    client = FakeGraphClient({"/deviceCompliancePolicies": failure})

    with pytest.raises(CreateError) as excinfo:
        await CompliancePolicyStrategy(client).create_policy("token", "Baseline", "")

    assert excinfo.value.inner_error is failure


@pytest.mark.asyncio
async def test_create_wraps_transport_errors() -> None:
    client = FakeGraphClient(
        {"/deviceConfigurations": httpx.ReadError("connection reset")}
    )

    with pytest.raises(CreateError):
        await WindowsUpdateForBusinessPolicyStrategy(client).create_policy(
            "token", "Ring", ""
        )


@pytest.mark.asyncio
async def test_create_rejects_unparseable_response() -> None:
    client = FakeGraphClient({"/deviceCompliancePolicies": {"displayName": "x"}})

    with pytest.raises(CreateError) as excinfo:
        await CompliancePolicyStrategy(client).create_policy("token", "Baseline", "")

    assert "parse" in str(excinfo.value)


@pytest.mark.asyncio
async def test_assign_posts_group_target() -> None:
    client = FakeGraphClient()
    strategy = AssignPolicyToGroupStrategy(client)

    result = await strategy.assign_policy("policy-1", "group-1", "token")

    assert result.status == 204
    assert result.body == AssignmentAcknowledgement(ok=True)
    ((request, token),) = client.requests
    assert token == "token"
    assert request.url == "/deviceManagement/deviceCompliancePolicies/policy-1/assign"
    assert request.body == {
        "assignments": [
            {
                "target": {
                    "@odata.type": "#microsoft.graph.groupAssignmentTarget",
                    "groupId": "group-1",
                }
            }
        ]
    }


@pytest.mark.asyncio
async def test_assign_uses_configured_collection() -> None:
    client = FakeGraphClient()
    strategy = AssignPolicyToGroupStrategy(client, PolicyCollection.DEVICE_CONFIGURATIONS)

    await strategy.assign_policy("ring-1", "group-1", "token")

    assert client.urls == ["/deviceManagement/deviceConfigurations/ring-1/assign"]


@pytest.mark.asyncio
async def test_assign_ignores_graph_response_body() -> None:
    client = FakeGraphClient({"/assign": {"value": [{"id": "assignment-1"}]}})

    result = await AssignPolicyToGroupStrategy(client).assign_policy(
        "policy-1", "group-1", "token"
    )

    assert result.status == 204
    assert result.body.to_graph() == {"ok": True}


@pytest.mark.asyncio
@pytest.mark.parametrize(("policy_id", "group_id"), [("", "group-1"), ("policy-1", "")])
async def test_assign_requires_ids(policy_id: str, group_id: str) -> None:
    client = FakeGraphClient()

    with pytest.raises(AssignError):
        await AssignPolicyToGroupStrategy(client).assign_policy(
            policy_id, group_id, "token"
        )

    assert client.requests == []


@pytest.mark.asyncio
async def test_assign_wraps_graph_errors() -> None:
    failure = GraphAPIError(
        message="Group not found",
        category=GraphErrorCategory.VALIDATION,
        status_code=404,
    )
    client = FakeGraphClient({"/assign": failure})

    with pytest.raises(AssignError) as excinfo:
        await AssignPolicyToGroupStrategy(client).assign_policy(
            "policy-1", "missing-group", "token"
        )

    assert excinfo.value.inner_error is failure
    assert str(excinfo.value) == "Failed to assign policy"
