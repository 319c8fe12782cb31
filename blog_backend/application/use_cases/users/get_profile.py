"""Use-case for introspecting the current session."""

from __future__ import annotations

from blog_backend.domain.users.entities import SessionClaims
from blog_backend.domain.users.repositories import TokenService


class GetProfileUseCase:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> SessionClaims:
        return self._tokens.verify(token)
