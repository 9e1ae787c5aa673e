"""Policy creation and assignment strategies."""

from .assignments import AssignPolicyToGroupStrategy
from .base import (
    AssignPolicyStrategy,
    CreatePolicyStrategy,
    GraphExecutor,
    PolicyResult,
)
from .compliance import CompliancePolicyStrategy
from .context import PoliciesContext
from .creation import PolicyCreationStrategy
from .update_rings import WindowsUpdateForBusinessPolicyStrategy
from .workflow import WorkflowOutcome, create_or_reuse_and_assign

__all__ = [
    "AssignPolicyStrategy",
    "AssignPolicyToGroupStrategy",
    "CompliancePolicyStrategy",
    "CreatePolicyStrategy",
    "GraphExecutor",
    "PoliciesContext",
    "PolicyCreationStrategy",
    "PolicyResult",
    "WindowsUpdateForBusinessPolicyStrategy",
    "WorkflowOutcome",
    "create_or_reuse_and_assign",
]
