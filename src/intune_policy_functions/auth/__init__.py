"""Authentication utilities for the Intune policy functions."""

from .service_principal import CredentialProvider, ServicePrincipal
from .types import AccessToken

__all__ = ["AccessToken", "CredentialProvider", "ServicePrincipal"]
