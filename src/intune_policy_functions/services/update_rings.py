from __future__ import annotations

from intune_policy_functions.graph.requests import PolicyCollection
from intune_policy_functions.models import (
    CreatedUpdateRingPolicy,
    WindowsUpdateForBusinessConfiguration,
)
from intune_policy_functions.services.creation import PolicyCreationStrategy


class WindowsUpdateForBusinessPolicyStrategy(
    PolicyCreationStrategy[CreatedUpdateRingPolicy]
):
    """Create Windows Update for Business rings under ``deviceConfigurations``."""

    collection = PolicyCollection.DEVICE_CONFIGURATIONS
    payload_model = WindowsUpdateForBusinessConfiguration
    created_model = CreatedUpdateRingPolicy
    policy_label = "windows update policy"


__all__ = ["WindowsUpdateForBusinessPolicyStrategy"]
