from __future__ import annotations

from typing import NamedTuple


class AccessToken(NamedTuple):
    """Bearer token issued by the client-credentials grant.

    ``expires_on`` is a Unix timestamp.
    """

    token: str
    expires_on: int


__all__ = ["AccessToken"]
