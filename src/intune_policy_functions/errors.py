from __future__ import annotations


class PolicyWorkflowError(Exception):
    """Base class for failures raised while creating or assigning a policy."""

    default_message = "Policy request failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        inner_error: Exception | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.inner_error = inner_error
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class MethodNotAllowedError(PolicyWorkflowError):
    default_message = "Method Not Allowed"


class RequestValidationError(PolicyWorkflowError):
    default_message = "Request body is invalid"


class AuthError(PolicyWorkflowError):
    default_message = "Failed to acquire access token"


class CreateError(PolicyWorkflowError):
    default_message = "Failed to create policy"


class AssignError(PolicyWorkflowError):
    default_message = "Failed to assign policy"


__all__ = [
    "PolicyWorkflowError",
    "MethodNotAllowedError",
    "RequestValidationError",
    "AuthError",
    "CreateError",
    "AssignError",
]
