"""Capability checks consulted before serving protected files."""

from __future__ import annotations

import hmac
from typing import Callable, Iterable, Optional

from fastapi import Depends, Request

from .config import Settings, get_settings

AuthContext = Callable[[], bool]


def allow_all() -> bool:
    return True


def deny_all() -> bool:
    return False


class TokenAuthContext:
    """Permit callers presenting one of the accepted access tokens."""

    def __init__(self, presented: Optional[str], accepted_tokens: Iterable[str]) -> None:
        self.presented = presented
        self.accepted_tokens = tuple(token for token in accepted_tokens if token)

    def __call__(self) -> bool:
        if not self.presented:
            return False
        presented = self.presented.encode("utf-8")
        # Compare against every token so timing does not depend on the match position.
        matched = False
        for token in self.accepted_tokens:
            if hmac.compare_digest(presented, token.encode("utf-8")):
                matched = True
        return matched


def extract_token(request: Request) -> Optional[str]:
    """Read a token from the Authorization header, X-Access-Token or ``?token=``."""
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    header_token = request.headers.get("x-access-token")
    if header_token:
        return header_token.strip()
    return request.query_params.get("token") or None


async def get_auth_context(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    """Build the capability check for the current request.

    Host applications with their own session layer override this dependency.
    """
    return TokenAuthContext(extract_token(request), settings.access_tokens)
