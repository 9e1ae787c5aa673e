from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class GraphBaseModel(BaseModel):
    """Base class for Graph payload helpers."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def from_graph(cls, payload: dict[str, Any]) -> Self:
        """Hydrate a model from a raw Graph response."""
        return cls.model_validate(payload)

    def to_graph(self) -> dict[str, Any]:
        """Serialize to a Graph-friendly payload."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            serialize_as_any=True,
        )


class PolicyPayload(GraphBaseModel):
    """Policy body sent to a create endpoint.

    Explicit ``null`` settings are part of the template, so they are kept
    on serialisation.
    """

    display_name: str = Field(alias="displayName")
    description: str = Field(default="", alias="description")

    def to_graph(self) -> dict[str, Any]:
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=False,
            serialize_as_any=True,
        )


__all__ = ["GraphBaseModel", "PolicyPayload"]
