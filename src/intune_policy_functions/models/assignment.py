from __future__ import annotations

from typing import Literal, Self

from pydantic import Field

from .common import GraphBaseModel


class GroupAssignmentTarget(GraphBaseModel):
    odata_type: Literal["#microsoft.graph.groupAssignmentTarget"] = Field(
        default="#microsoft.graph.groupAssignmentTarget",
        alias="@odata.type",
    )
    group_id: str = Field(alias="groupId", min_length=1)


class PolicyAssignment(GraphBaseModel):
    target: GroupAssignmentTarget


class PolicyAssignmentRequest(GraphBaseModel):
    """Body of the ``assign`` action; replaces all assignments of the policy."""

    assignments: tuple[PolicyAssignment, ...]

    @classmethod
    def for_group(cls, group_id: str) -> Self:
        return cls(
            assignments=(
                PolicyAssignment(target=GroupAssignmentTarget(group_id=group_id)),
            ),
        )


class AssignmentAcknowledgement(GraphBaseModel):
    ok: bool = True


__all__ = [
    "AssignmentAcknowledgement",
    "GroupAssignmentTarget",
    "PolicyAssignment",
    "PolicyAssignmentRequest",
]
