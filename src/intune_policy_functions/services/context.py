from __future__ import annotations

from typing import Generic, TypeVar

from intune_policy_functions.models import AssignmentAcknowledgement
from intune_policy_functions.services.assignments import AssignPolicyToGroupStrategy
from intune_policy_functions.services.base import (
    AssignPolicyStrategy,
    CreatePolicyStrategy,
    PolicyResult,
)


PolicyT = TypeVar("PolicyT")


class PoliciesContext(Generic[PolicyT]):
    """Bind a policy name/description to a creation strategy.

    When no assignment strategy is supplied the context assigns through the
    same Graph collection the creation strategy writes to, so compliance
    policies and update rings each use their own ``assign`` endpoint.
    """

    def __init__(
        self,
        name: str | None,
        description: str | None,
        create_strategy: CreatePolicyStrategy[PolicyT],
        assign_strategy: AssignPolicyStrategy | None = None,
    ) -> None:
        self._name = name
        self._description = description or ""
        self._create_strategy = create_strategy
        self._assign_strategy = assign_strategy or AssignPolicyToGroupStrategy(
            create_strategy.client,
            create_strategy.collection,
        )

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    async def post_policy(self, access_token: str) -> PolicyResult[PolicyT]:
        return await self._create_strategy.create_policy(
            access_token, self._name, self._description  # type: ignore[arg-type]
        )

    async def assign_policy(
        self, policy_id: str, group_id: str, access_token: str
    ) -> PolicyResult[AssignmentAcknowledgement]:
        return await self._assign_strategy.assign_policy(
            policy_id, group_id, access_token
        )


__all__ = ["PoliciesContext"]
