from __future__ import annotations

from dataclasses import dataclass

from intune_policy_functions.errors import CreateError
from intune_policy_functions.models import AssignmentAcknowledgement
from intune_policy_functions.services.base import PolicyResult
from intune_policy_functions.services.context import PoliciesContext
from intune_policy_functions.utils import get_logger, sanitize_log_message


logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class WorkflowOutcome:
    policy_id: str
    created: bool
    assignment: PolicyResult[AssignmentAcknowledgement]


async def create_or_reuse_and_assign(
    context: PoliciesContext[object],
    *,
    access_token: str,
    group_id: str,
    policy_id: str | None = None,
) -> WorkflowOutcome:
    """Create the policy unless an ID is supplied, then assign it to the group."""

    created = False
    resolved_id = policy_id.strip() if policy_id else ""
    if not resolved_id:
        logger.info(
            "No policy ID provided, creating a new policy",
            name=sanitize_log_message(context.name),
        )
        result = await context.post_policy(access_token)
        resolved_id = getattr(result.body, "id", None) or ""
        if not resolved_id:
            raise CreateError("Created policy response did not include an id")
        created = True
    else:
        logger.info("Using provided policy ID", policy_id=sanitize_log_message(resolved_id))

    assignment = await context.assign_policy(resolved_id, group_id, access_token)
    return WorkflowOutcome(policy_id=resolved_id, created=created, assignment=assignment)


__all__ = ["WorkflowOutcome", "create_or_reuse_and_assign"]
