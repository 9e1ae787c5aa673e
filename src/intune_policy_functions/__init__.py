"""Azure Functions that create and assign Intune compliance policies and update rings."""

from __future__ import annotations

from .errors import (
    AssignError,
    AuthError,
    CreateError,
    MethodNotAllowedError,
    PolicyWorkflowError,
    RequestValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "AssignError",
    "AuthError",
    "CreateError",
    "MethodNotAllowedError",
    "PolicyWorkflowError",
    "RequestValidationError",
    "__version__",
]
