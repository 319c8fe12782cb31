"""Use-case for ending a session."""

from __future__ import annotations

from blog_backend.domain.users.entities import SessionClaims
from blog_backend.domain.users.exceptions import UnauthenticatedError
from blog_backend.domain.users.repositories import TokenService


class LogoutUserUseCase:
    """Tokens are stateless, so logging out only drops the client cookie.

    Returns the claims of the outgoing session when it was still valid so the
    caller can record who left; never raises.
    """

    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> SessionClaims | None:
        if not token:
            return None
        try:
            return self._tokens.verify(token)
        except UnauthenticatedError:
            return None
