from __future__ import annotations

from typing import Any

from intune_policy_functions.handlers.base import PolicyRequestHandler
from intune_policy_functions.handlers.schemas import CompliancePolicyRequest
from intune_policy_functions.services import (
    CompliancePolicyStrategy,
    GraphExecutor,
    PoliciesContext,
)


class CompliancePolicyHandler(PolicyRequestHandler[CompliancePolicyRequest]):
    """Create (unless ``complianceid`` is given) and assign a compliance policy."""

    function_name = "HttpTriggerCreatePolicies"
    body_model = CompliancePolicyRequest

    def build_context(
        self, client: GraphExecutor, body: CompliancePolicyRequest
    ) -> PoliciesContext[Any]:
        return PoliciesContext(
            body.name,
            body.description,
            CompliancePolicyStrategy(client),
        )


__all__ = ["CompliancePolicyHandler"]
