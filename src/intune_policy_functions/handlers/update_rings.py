from __future__ import annotations

from typing import Any

from intune_policy_functions.handlers.base import PolicyRequestHandler
from intune_policy_functions.handlers.schemas import UpdateRingRequest
from intune_policy_functions.services import (
    GraphExecutor,
    PoliciesContext,
    WindowsUpdateForBusinessPolicyStrategy,
)


class UpdateRingHandler(PolicyRequestHandler[UpdateRingRequest]):
    """Create (unless ``policyId`` is given) and assign a Windows update ring."""

    function_name = "HttpTriggerUpdateRings"
    body_model = UpdateRingRequest

    def build_context(
        self, client: GraphExecutor, body: UpdateRingRequest
    ) -> PoliciesContext[Any]:
        return PoliciesContext(
            body.name,
            body.description,
            WindowsUpdateForBusinessPolicyStrategy(client),
        )


__all__ = ["UpdateRingHandler"]
