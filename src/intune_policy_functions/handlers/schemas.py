from __future__ import annotations

from typing import Any, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class PolicyRequestBody(BaseModel):
    """Fields accepted by the policy HTTP triggers.

    ``name`` is only needed when no existing policy ID is supplied, since
    that is the only case where a policy gets created.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    name: str | None = None
    description: str | None = None
    group_id: str = Field(alias="groupId", min_length=1)
    policy_id: str | None = Field(default=None, alias="policyId")

    @field_validator("name", "description", "policy_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _require_name_for_creation(self) -> Self:
        if self.policy_id is None and self.name is None:
            raise ValueError("name is required when no policy ID is provided")
        return self

    @property
    def creates_policy(self) -> bool:
        return self.policy_id is None


class CompliancePolicyRequest(PolicyRequestBody):
    policy_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("complianceid", "complianceId", "policyId"),
    )


class UpdateRingRequest(PolicyRequestBody):
    policy_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("policyId", "policyid"),
    )


__all__ = ["CompliancePolicyRequest", "PolicyRequestBody", "UpdateRingRequest"]
