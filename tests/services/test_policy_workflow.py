from __future__ import annotations

import pytest

from intune_policy_functions.errors import AssignError, CreateError
from intune_policy_functions.graph import GraphAPIError, PolicyCollection
from intune_policy_functions.models import AssignmentAcknowledgement
from intune_policy_functions.services import (
    CompliancePolicyStrategy,
    PoliciesContext,
    PolicyResult,
    WindowsUpdateForBusinessPolicyStrategy,
    create_or_reuse_and_assign,
)

from tests.factories import make_compliance_response, make_update_ring_response
from tests.stubs import FakeGraphClient


class RecordingAssignStrategy:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    async def assign_policy(
        self, policy_id: str, group_id: str, access_token: str
    ) -> PolicyResult[AssignmentAcknowledgement]:
        self.calls.append((policy_id, group_id, access_token))
        return PolicyResult(status=204, body=AssignmentAcknowledgement())


@pytest.mark.asyncio
async def test_context_defaults_to_creation_collection_for_assignment() -> None:
    client = FakeGraphClient()
    context = PoliciesContext("Ring", None, WindowsUpdateForBusinessPolicyStrategy(client))

    await context.assign_policy("ring-1", "group-1", "token")

    assert context.description == ""
    assert client.urls == ["/deviceManagement/deviceConfigurations/ring-1/assign"]


@pytest.mark.asyncio
async def test_context_delegates_to_supplied_strategies() -> None:
    client = FakeGraphClient(
        {"/deviceCompliancePolicies": make_compliance_response("policy-7")}
    )
    assigner = RecordingAssignStrategy()
    context = PoliciesContext(
        "Baseline", "desc", CompliancePolicyStrategy(client), assigner
    )

    created = await context.post_policy("token")
    assigned = await context.assign_policy("policy-7", "group-1", "token")

    assert created.body.id == "policy-7"
    assert assigned.status == 204
    assert assigner.calls == [("policy-7", "group-1", "token")]
    assert client.urls == ["/deviceManagement/deviceCompliancePolicies"]


@pytest.mark.asyncio
async def test_workflow_creates_then_assigns_created_id() -> None:
    client = FakeGraphClient(
        {"/deviceCompliancePolicies": make_compliance_response("new-id")}
    )
    context = PoliciesContext("Baseline", "desc", CompliancePolicyStrategy(client))

    outcome = await create_or_reuse_and_assign(
        context, access_token="token", group_id="group-1"
    )

    assert outcome.policy_id == "new-id"
    assert outcome.created is True
    assert outcome.assignment.status == 204
    assert client.urls == [
        "/deviceManagement/deviceCompliancePolicies",
        "/deviceManagement/deviceCompliancePolicies/new-id/assign",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("policy_id", ["existing-id", "  existing-id  "])
async def test_workflow_reuses_supplied_policy_id(policy_id: str) -> None:
    client = FakeGraphClient()
    context = PoliciesContext(None, None, WindowsUpdateForBusinessPolicyStrategy(client))

    outcome = await create_or_reuse_and_assign(
        context, access_token="token", group_id="group-1", policy_id=policy_id
    )

    assert outcome.policy_id == "existing-id"
    assert outcome.created is False
    assert client.urls == ["/deviceManagement/deviceConfigurations/existing-id/assign"]


@pytest.mark.asyncio
async def test_workflow_treats_blank_policy_id_as_absent() -> None:
    client = FakeGraphClient(
        {"/deviceConfigurations": make_update_ring_response("ring-2")}
    )
    context = PoliciesContext("Ring", "", WindowsUpdateForBusinessPolicyStrategy(client))

    outcome = await create_or_reuse_and_assign(
        context, access_token="token", group_id="group-1", policy_id="   "
    )

    assert outcome.created is True
    assert outcome.policy_id == "ring-2"


@pytest.mark.asyncio
async def test_workflow_skips_assignment_when_creation_fails() -> None:
    client = FakeGraphClient(
        {"/deviceCompliancePolicies": GraphAPIError(message="boom", status_code=500)}
    )
    context = PoliciesContext("Baseline", "", CompliancePolicyStrategy(client))

    with pytest.raises(CreateError):
        await create_or_reuse_and_assign(context, access_token="token", group_id="g")

    assert client.urls == ["/deviceManagement/deviceCompliancePolicies"]


@pytest.mark.asyncio
async def test_workflow_propagates_assignment_failure() -> None:
    client = FakeGraphClient({"/assign": GraphAPIError(message="nope", status_code=404)})
    context = PoliciesContext("Baseline", "", CompliancePolicyStrategy(client))

    with pytest.raises(AssignError):
        await create_or_reuse_and_assign(
            context, access_token="token", group_id="g", policy_id="policy-1"
        )


def test_strategy_collections() -> None:
    client = FakeGraphClient()

    assert (
        CompliancePolicyStrategy(client).collection
        is PolicyCollection.DEVICE_COMPLIANCE_POLICIES
    )
    assert (
        WindowsUpdateForBusinessPolicyStrategy(client).collection
        is PolicyCollection.DEVICE_CONFIGURATIONS
    )
