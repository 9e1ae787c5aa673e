"""HTTP trigger handlers for the policy functions."""

from .base import INTERNAL_ERROR_BODY, PolicyRequestHandler
from .compliance import CompliancePolicyHandler
from .schemas import CompliancePolicyRequest, PolicyRequestBody, UpdateRingRequest
from .update_rings import UpdateRingHandler

__all__ = [
    "CompliancePolicyHandler",
    "CompliancePolicyRequest",
    "INTERNAL_ERROR_BODY",
    "PolicyRequestBody",
    "PolicyRequestHandler",
    "UpdateRingHandler",
    "UpdateRingRequest",
]
