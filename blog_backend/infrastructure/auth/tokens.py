# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, time-limited session tokens (HS256 JWT)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from blog_backend.domain.users.entities import SessionClaims
from blog_backend.domain.users.exceptions import UnauthenticatedError
from blog_backend.domain.users.repositories import TokenService
from blog_backend.shared.logging import logger

_JWT_ALG = "HS256"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """Stateless token issuer/verifier.

    Tokens carry ``id``, ``username``, ``iat`` and ``exp``. Nothing is stored
    server-side; a token stays valid until ``exp`` unless the client drops it.
    ``clock`` only drives issuing, verification always compares against the
    current time.
    """

    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int, username: str) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "id": user_id,
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=_JWT_ALG)

    def verify(self, token: str | None) -> SessionClaims:
        if not token:
            raise UnauthenticatedError()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_JWT_ALG],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.debug("auth.token: expired")
            raise UnauthenticatedError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"auth.token: invalid ({type(exc).__name__})")
            raise UnauthenticatedError() from exc

        user_id = payload.get("id")
        username = payload.get("username")
        # bool is an int subclass; reject it explicitly
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise UnauthenticatedError()
        if not isinstance(username, str) or not username:
            raise UnauthenticatedError()

        return SessionClaims(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


__all__ = ["JwtTokenService"]
