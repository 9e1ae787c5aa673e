from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from intune_policy_functions.graph.requests import GraphRequest, PolicyCollection
from intune_policy_functions.models import AssignmentAcknowledgement


T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True, slots=True)
class PolicyResult(Generic[T_co]):
    """Status code and body produced by a strategy call."""

    status: int
    body: T_co


class GraphExecutor(Protocol):
    """Subset of ``GraphClient`` the strategies depend on."""

    async def execute(
        self, request: GraphRequest, *, access_token: str
    ) -> dict[str, Any]: ...


class CreatePolicyStrategy(Protocol[T_co]):
    @property
    def client(self) -> GraphExecutor: ...

    @property
    def collection(self) -> PolicyCollection: ...

    async def create_policy(
        self, access_token: str, name: str, description: str
    ) -> PolicyResult[T_co]: ...


class AssignPolicyStrategy(Protocol):
    async def assign_policy(
        self, policy_id: str, group_id: str, access_token: str
    ) -> PolicyResult[AssignmentAcknowledgement]: ...


__all__ = [
    "AssignPolicyStrategy",
    "CreatePolicyStrategy",
    "GraphExecutor",
    "PolicyResult",
]
