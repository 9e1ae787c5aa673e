from __future__ import annotations

from typing import ClassVar, Generic, TypeVar

import httpx
from pydantic import ValidationError

from intune_policy_functions.errors import CreateError
from intune_policy_functions.graph.errors import GraphAPIError
from intune_policy_functions.graph.requests import PolicyCollection, policy_create_request
from intune_policy_functions.models import PolicyPayload
from intune_policy_functions.services.base import GraphExecutor, PolicyResult
from intune_policy_functions.utils import get_logger, sanitize_log_message


logger = get_logger(__name__)

CreatedT = TypeVar("CreatedT", bound=PolicyPayload)

CREATED_STATUS = 201


class PolicyCreationStrategy(Generic[CreatedT]):
    """POST a fixed policy template into an Intune collection.

    Subclasses pick the collection, the template model and the model used
    to parse the created resource.
    """

    collection: ClassVar[PolicyCollection]
    payload_model: ClassVar[type[PolicyPayload]]
    created_model: ClassVar[type[PolicyPayload]]
    policy_label: ClassVar[str] = "policy"

    def __init__(self, client: GraphExecutor) -> None:
        self._client = client

    @property
    def client(self) -> GraphExecutor:
        return self._client

    def build_payload(self, name: str, description: str) -> PolicyPayload:
        return self.payload_model(display_name=name, description=description)

    async def create_policy(
        self, access_token: str, name: str, description: str
    ) -> PolicyResult[CreatedT]:
        try:
            payload = self.build_payload(name, description)
        except ValidationError as exc:
            raise CreateError(
                f"Invalid {self.policy_label} template values", inner_error=exc
            ) from exc

        request = policy_create_request(self.collection, payload.to_graph())
        logger.info(
            "Creating policy",
            kind=self.policy_label,
            collection=self.collection.value,
            display_name=sanitize_log_message(name),
        )
        try:
            response = await self._client.execute(request, access_token=access_token)
        except GraphAPIError as exc:
            logger.error(
                "Policy creation failed",
                kind=self.policy_label,
                status_code=exc.status_code,
                category=exc.category.value,
                code=exc.code,
                cli_example=exc.cli_example,
            )
            raise CreateError(
                f"Failed to create {self.policy_label}", inner_error=exc
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(
                "Policy creation failed", kind=self.policy_label, error=str(exc)
            )
            raise CreateError(
                f"Failed to create {self.policy_label}", inner_error=exc
            ) from exc

        try:
            created = self.created_model.from_graph(response)
        except ValidationError as exc:
            logger.error(
                "Graph returned an unexpected policy payload",
                kind=self.policy_label,
                errors=exc.error_count(),
            )
            raise CreateError(
                f"Failed to parse created {self.policy_label}", inner_error=exc
            ) from exc

        logger.info(
            "Created policy",
            kind=self.policy_label,
            policy_id=getattr(created, "id", None),
        )
        return PolicyResult(status=CREATED_STATUS, body=created)  # type: ignore[arg-type]


__all__ = ["CREATED_STATUS", "PolicyCreationStrategy"]
