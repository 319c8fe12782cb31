# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.posts.entities import Post
from blog_backend.domain.users.entities import SessionClaims
from blog_backend.domain.users.exceptions import ForbiddenError
from blog_backend.domain.users.repositories import TokenService
from blog_backend.shared.logging import logger


class PostOwnershipGuard:
    """Only the author recorded on a post may mutate it."""

    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, token: str | None) -> SessionClaims:
        return self._tokens.verify(token)

    def authorize(self, token: str | None, post: Post) -> SessionClaims:
        claims = self.authenticate(token)
        self.ensure_author(claims, post)
        return claims

    @staticmethod
    def ensure_author(claims: SessionClaims, post: Post) -> None:
        if claims.user_id != post.author_id:
            logger.warning(
                f"posts.guard: forbidden (post_id={post.id}, author_id={post.author_id}, "
                f"requester_id={claims.user_id})"
            )
            raise ForbiddenError()
