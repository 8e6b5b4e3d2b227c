from __future__ import annotations

"""Bearer-token gate for the user API.

Verification is pluggable: anything with a `verify(token) -> Principal` method
that raises `UnauthorizedError` on rejection can be installed on
`app.state.token_verifier`. With no verifier installed the gate is open.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.errors import UnauthorizedError

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized - Missing or invalid token"

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    subject: str
    claims: dict[str, Any] = field(default_factory=dict)


class TokenVerifier(Protocol):
    def verify(self, token: str) -> Principal: ...


class PresenceTokenVerifier:
    """Accepts any non-empty token. Not a credential check; local use only."""

    def verify(self, token: str) -> Principal:
        if not token:
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
        return Principal(subject="anonymous")


class JWTTokenVerifier:
    """Checks an HS256-signed JWT and takes the principal from its `sub` claim."""

    def __init__(self, secret: str, algorithms: tuple[str, ...] = ("HS256",)) -> None:
        self.secret = secret
        self.algorithms = algorithms

    def verify(self, token: str) -> Principal:
        try:
            claims = jwt.decode(token, self.secret, algorithms=list(self.algorithms))
        except JWTError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE) from exc

        subject = claims.get("sub")
        if not subject:
            logger.info("Rejected bearer token: no subject claim")
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
        return Principal(subject=str(subject), claims=claims)


def build_token_verifier(mode: str, secret: str) -> TokenVerifier | None:
    if mode == "none":
        return None
    if mode == "bearer":
        return PresenceTokenVerifier()
    if mode == "jwt":
        return JWTTokenVerifier(secret)
    raise ValueError(f"Unknown auth mode: {mode}")


def require_bearer_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal | None:
    """FastAPI dependency run before any user endpoint (and its body parsing)."""

    verifier: TokenVerifier | None = getattr(request.app.state, "token_verifier", None)
    if verifier is None:
        return None
    if credentials is None:
        raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
    return verifier.verify(credentials.credentials)
