# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from blog_backend.application.services.ownership import PostOwnershipGuard
from blog_backend.domain.posts.entities import CoverUpload, Post, PostChanges
from blog_backend.domain.posts.exceptions import PostNotFoundError
from blog_backend.domain.posts.repositories import BlobStore, PostRepository
from blog_backend.shared.logging import logger


@dataclass(slots=True, frozen=True)
class UpdatePostInput:
    post_id: int
    title: str
    summary: str
    content: str
    cover: CoverUpload | None = None


class UpdatePostUseCase:
    def __init__(
        self,
        *,
        posts: PostRepository,
        blobs: BlobStore,
        guard: PostOwnershipGuard,
    ) -> None:
        self._posts = posts
        self._blobs = blobs
        self._guard = guard

    def execute(self, token: str | None, data: UpdatePostInput) -> Post:
        claims = self._guard.authenticate(token)
        post = self._posts.find_by_id(data.post_id)
        if post is None:
            raise PostNotFoundError(data.post_id)
        self._guard.ensure_author(claims, post)

        locator = self._blobs.store(data.cover) if data.cover is not None else None
        updated = self._posts.update(
            post.id,
            PostChanges(
                title=data.title,
                summary=data.summary,
                content=data.content,
                cover=locator,
            ),
        )
        logger.info(
            f"posts.update: ok (post_id={post.id}, author_id={claims.user_id}, "
            f"cover_replaced={locator is not None})"
        )
        return updated
