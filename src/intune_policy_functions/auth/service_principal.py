from __future__ import annotations

import asyncio
import time
from typing import Protocol, Sequence

import msal

from intune_policy_functions.auth.types import AccessToken
from intune_policy_functions.config.settings import DEFAULT_GRAPH_SCOPE, Settings
from intune_policy_functions.errors import AuthError
from intune_policy_functions.utils import get_logger


logger = get_logger(__name__)


class CredentialProvider(Protocol):
    async def get_access_token(self) -> str: ...


class ServicePrincipal:
    """Client-credentials token source backed by an MSAL confidential client.

    A fresh instance is built per invocation, so MSAL's in-memory token
    cache never outlives the request that populated it.
    """

    def __init__(
        self,
        tenant_id: str | None,
        client_id: str | None,
        client_secret: str | None,
        *,
        scopes: Sequence[str] | None = None,
        authority_host: str = "https://login.microsoftonline.com",
    ) -> None:
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._scopes = list(scopes or [DEFAULT_GRAPH_SCOPE])
        self._authority = f"{authority_host.rstrip('/')}/{tenant_id}"
        self._app: msal.ConfidentialClientApplication | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServicePrincipal":
        return cls(
            settings.tenant_id,
            settings.client_id,
            settings.client_secret,
            scopes=settings.scopes(),
            authority_host=settings.authority_host,
        )

    @property
    def scopes(self) -> list[str]:
        return list(self._scopes)

    async def get_access_token(self) -> str:
        """Return the bearer token string for the configured scope."""
        token = await self.acquire_token()
        return token.token

    async def acquire_token(self) -> AccessToken:
        logger.info("Requesting access token", tenant_id=self._tenant_id)
        try:
            token = await asyncio.to_thread(self._acquire_token_sync)
        except AuthError:
            logger.error("Access token request failed", tenant_id=self._tenant_id)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "Unexpected error acquiring access token", tenant_id=self._tenant_id
            )
            raise AuthError(inner_error=exc) from exc
        logger.info("Access token received", expires_on=token.expires_on)
        return token

    # Internal --------------------------------------------------------

    def _acquire_token_sync(self) -> AccessToken:
        app = self._ensure_app()
        result = app.acquire_token_for_client(scopes=self._scopes)
        return self._process_result(result)

    def _ensure_app(self) -> msal.ConfidentialClientApplication:
        if self._app is not None:
            return self._app
        missing = [
            name
            for name, value in (
                ("TENANT_ID", self._tenant_id),
                ("CLIENT_ID", self._client_id),
                ("CLIENT_SECRET", self._client_secret),
            )
            if not value
        ]
        if missing:
            raise AuthError(
                f"Service principal is not configured; missing {', '.join(missing)}"
            )
        try:
            self._app = msal.ConfidentialClientApplication(
                client_id=self._client_id,
                client_credential=self._client_secret,
                authority=self._authority,
            )
        except ValueError as exc:
            logger.error(
                "Invalid MSAL configuration", authority=self._authority, error=str(exc)
            )
            raise AuthError(
                f"Invalid authority for service principal: {exc}", inner_error=exc
            ) from exc
        return self._app

    def _process_result(self, result: dict[str, object] | None) -> AccessToken:
        if not result:
            raise AuthError("Token endpoint returned no response")
        if "error" in result:
            error_code = result.get("error")
            error_desc = result.get("error_description", error_code)
            raise AuthError(f"MSAL error: {error_desc}")

        access_token = result.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise AuthError("MSAL response missing access token")

        expires_in = result.get("expires_in")
        expiry = (
            int(time.time()) + int(expires_in)
            if isinstance(expires_in, (int, str))
            else int(time.time()) + 3600
        )
        return AccessToken(access_token, expiry)


__all__ = ["CredentialProvider", "ServicePrincipal"]
