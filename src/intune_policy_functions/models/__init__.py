"""Graph payload models for Intune compliance policies and update rings."""

from .assignment import (
    AssignmentAcknowledgement,
    GroupAssignmentTarget,
    PolicyAssignment,
    PolicyAssignmentRequest,
)
from .common import GraphBaseModel, PolicyPayload
from .compliance import (
    CreatedCompliancePolicy,
    ScheduledActionConfiguration,
    ScheduledActionForRule,
    ScheduledActionType,
    Windows10CompliancePolicy,
)
from .update_ring import (
    AutomaticUpdateMode,
    CreatedUpdateRingPolicy,
    UpdateNotificationLevel,
    WindowsUpdateActiveHoursInstall,
    WindowsUpdateForBusinessConfiguration,
)

__all__ = [
    "AssignmentAcknowledgement",
    "AutomaticUpdateMode",
    "CreatedCompliancePolicy",
    "CreatedUpdateRingPolicy",
    "GraphBaseModel",
    "GroupAssignmentTarget",
    "PolicyAssignment",
    "PolicyAssignmentRequest",
    "PolicyPayload",
    "ScheduledActionConfiguration",
    "ScheduledActionForRule",
    "ScheduledActionType",
    "UpdateNotificationLevel",
    "Windows10CompliancePolicy",
    "WindowsUpdateActiveHoursInstall",
    "WindowsUpdateForBusinessConfiguration",
]
