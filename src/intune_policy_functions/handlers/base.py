from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Generic, Protocol, TypeVar

import azure.functions as func
from pydantic import ValidationError

from intune_policy_functions.auth import CredentialProvider, ServicePrincipal
from intune_policy_functions.config import Settings, SettingsManager
from intune_policy_functions.errors import (
    MethodNotAllowedError,
    PolicyWorkflowError,
    RequestValidationError,
)
from intune_policy_functions.graph import GraphClient
from intune_policy_functions.handlers.schemas import PolicyRequestBody
from intune_policy_functions.services import (
    GraphExecutor,
    PoliciesContext,
    WorkflowOutcome,
    create_or_reuse_and_assign,
)
from intune_policy_functions.utils import get_logger, sanitize_log_message


logger = get_logger(__name__)

BodyT = TypeVar("BodyT", bound=PolicyRequestBody)

ALLOWED_METHOD = "POST"
INTERNAL_ERROR_BODY: dict[str, str] = {"message": "Internal Server Error"}


class GraphSession(GraphExecutor, Protocol):
    async def __aenter__(self) -> "GraphSession": ...

    async def __aexit__(self, *exc_info: Any) -> None: ...


SettingsLoader = Callable[[], Settings]
CredentialFactory = Callable[[Settings], CredentialProvider]
GraphClientFactory = Callable[[Settings], GraphSession]


def _load_settings() -> Settings:
    return SettingsManager().load()


class PolicyRequestHandler(ABC, Generic[BodyT]):
    """Shared create-or-reuse-then-assign flow for the policy triggers.

    Every failure after the method check collapses into the same 500
    response; the error kind is only visible in the logs.
    """

    function_name: ClassVar[str]
    body_model: ClassVar[type[PolicyRequestBody]]

    def __init__(
        self,
        *,
        settings_loader: SettingsLoader | None = None,
        credential_factory: CredentialFactory | None = None,
        client_factory: GraphClientFactory | None = None,
    ) -> None:
        self._settings_loader = settings_loader or _load_settings
        self._credential_factory = credential_factory or ServicePrincipal.from_settings
        self._client_factory = client_factory or GraphClient.from_settings

    @abstractmethod
    def build_context(
        self, client: GraphExecutor, body: BodyT
    ) -> PoliciesContext[Any]:
        """Bind the request's name and description to a creation strategy."""

    async def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        log = logger.bind(function=self.function_name)
        log.info("HTTP trigger function processed a request.", method=req.method)

        try:
            self._ensure_method(req)
        except MethodNotAllowedError:
            log.warning("Rejected request method", method=req.method)
            return func.HttpResponse(
                "Method Not Allowed",
                status_code=405,
                mimetype="text/plain",
            )

        try:
            outcome = await self._process(req)
        except PolicyWorkflowError as exc:
            log.error(
                "Error processing request",
                error_type=type(exc).__name__,
                error=str(exc),
                cause=str(exc.inner_error) if exc.inner_error else None,
            )
            return self._internal_error()
        except Exception:  # noqa: BLE001
            log.exception("Unexpected error processing request")
            return self._internal_error()

        log.info(
            "Response sent",
            policy_id=outcome.policy_id,
            created=outcome.created,
            assignment_status=outcome.assignment.status,
        )
        return func.HttpResponse(
            json.dumps(outcome.assignment.body.to_graph()),
            status_code=201,
            mimetype="application/json",
        )

    # Internal --------------------------------------------------------

    async def _process(self, req: func.HttpRequest) -> WorkflowOutcome:
        body = self.parse_body(req)
        logger.info(
            "Parsed policy request",
            function=self.function_name,
            name=sanitize_log_message(body.name),
            description=sanitize_log_message(body.description),
            group_id=sanitize_log_message(body.group_id),
            policy_id=sanitize_log_message(body.policy_id),
            creates_policy=body.creates_policy,
        )

        settings = self._settings_loader()
        logger.info(
            "Initializing service principal",
            function=self.function_name,
            authority=settings.authority,
            configured=settings.is_configured,
        )
        credential = self._credential_factory(settings)
        access_token = await credential.get_access_token()

        async with self._client_factory(settings) as client:
            context = self.build_context(client, body)
            return await create_or_reuse_and_assign(
                context,
                access_token=access_token,
                group_id=body.group_id,
                policy_id=body.policy_id,
            )

    def parse_body(self, req: func.HttpRequest) -> BodyT:
        try:
            payload = req.get_json()
        except ValueError as exc:
            raise RequestValidationError("Request body must be JSON", inner_error=exc) from exc
        if not isinstance(payload, dict):
            raise RequestValidationError("Request body must be a JSON object")
        try:
            return self.body_model.model_validate(payload)  # type: ignore[return-value]
        except ValidationError as exc:
            raise RequestValidationError(
                f"Invalid request body: {exc.error_count()} error(s)",
                inner_error=exc,
            ) from exc

    @staticmethod
    def _ensure_method(req: func.HttpRequest) -> None:
        if (req.method or "").upper() != ALLOWED_METHOD:
            raise MethodNotAllowedError()

    @staticmethod
    def _internal_error() -> func.HttpResponse:
        return func.HttpResponse(
            json.dumps(INTERNAL_ERROR_BODY),
            status_code=500,
            mimetype="application/json",
        )


__all__ = [
    "ALLOWED_METHOD",
    "CredentialFactory",
    "GraphClientFactory",
    "GraphSession",
    "INTERNAL_ERROR_BODY",
    "PolicyRequestHandler",
    "SettingsLoader",
]
