from __future__ import annotations

from intune_policy_functions.graph.requests import PolicyCollection
from intune_policy_functions.models import (
    CreatedCompliancePolicy,
    Windows10CompliancePolicy,
)
from intune_policy_functions.services.creation import PolicyCreationStrategy


class CompliancePolicyStrategy(PolicyCreationStrategy[CreatedCompliancePolicy]):
    """Create Windows 10 compliance policies under ``deviceCompliancePolicies``."""

    collection = PolicyCollection.DEVICE_COMPLIANCE_POLICIES
    payload_model = Windows10CompliancePolicy
    created_model = CreatedCompliancePolicy
    policy_label = "compliance policy"


__all__ = ["CompliancePolicyStrategy"]
