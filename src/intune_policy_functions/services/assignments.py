from __future__ import annotations

import httpx
from pydantic import ValidationError

from intune_policy_functions.errors import AssignError
from intune_policy_functions.graph.errors import GraphAPIError
from intune_policy_functions.graph.requests import PolicyCollection, policy_assign_request
from intune_policy_functions.models import (
    AssignmentAcknowledgement,
    PolicyAssignmentRequest,
)
from intune_policy_functions.services.base import GraphExecutor, PolicyResult
from intune_policy_functions.utils import get_logger, sanitize_log_message


logger = get_logger(__name__)

ASSIGNED_STATUS = 204


class AssignPolicyToGroupStrategy:
    """Assign a policy to a single Azure AD group.

    The ``assign`` action replaces the policy's existing assignments, so the
    group becomes its only target. The local result is always the 204/ok
    acknowledgement once Graph accepts the call.
    """

    def __init__(
        self,
        client: GraphExecutor,
        collection: PolicyCollection = PolicyCollection.DEVICE_COMPLIANCE_POLICIES,
    ) -> None:
        self._client = client
        self._collection = collection

    @property
    def collection(self) -> PolicyCollection:
        return self._collection

    async def assign_policy(
        self, policy_id: str, group_id: str, access_token: str
    ) -> PolicyResult[AssignmentAcknowledgement]:
        if not policy_id or not policy_id.strip():
            raise AssignError("A policy ID is required for assignment")
        try:
            body = PolicyAssignmentRequest.for_group(group_id)
        except ValidationError as exc:
            raise AssignError("A group ID is required for assignment", inner_error=exc) from exc

        request = policy_assign_request(self._collection, policy_id, body.to_graph())
        logger.info(
            "Assigning policy",
            collection=self._collection.value,
            policy_id=sanitize_log_message(policy_id),
            group_id=sanitize_log_message(group_id),
        )
        try:
            await self._client.execute(request, access_token=access_token)
        except GraphAPIError as exc:
            logger.error(
                "Policy assignment failed",
                collection=self._collection.value,
                status_code=exc.status_code,
                category=exc.category.value,
                code=exc.code,
                cli_example=exc.cli_example,
            )
            raise AssignError(inner_error=exc) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Policy assignment failed", error=str(exc))
            raise AssignError(inner_error=exc) from exc

        logger.info("Policy assigned", collection=self._collection.value)
        return PolicyResult(status=ASSIGNED_STATUS, body=AssignmentAcknowledgement(ok=True))


__all__ = ["ASSIGNED_STATUS", "AssignPolicyToGroupStrategy"]
