# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from blog_backend.application.services.ownership import PostOwnershipGuard
from blog_backend.domain.posts.entities import CoverUpload, NewPost, Post
from blog_backend.domain.posts.repositories import BlobStore, PostRepository
from blog_backend.shared.errors import ValidationError
from blog_backend.shared.logging import logger


@dataclass(slots=True, frozen=True)
class CreatePostInput:
    title: str
    summary: str
    content: str
    cover: CoverUpload | None


class CreatePostUseCase:
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

    def execute(self, token: str | None, data: CreatePostInput) -> Post:
        claims = self._guard.authenticate(token)
        if data.cover is None:
            raise ValidationError("cover_required")

        # A failed upload raises before anything is written to the store.
        locator = self._blobs.store(data.cover)
        post = self._posts.add(
            NewPost(
                title=data.title,
                summary=data.summary,
                content=data.content,
                cover=locator,
                author_id=claims.user_id,
            )
        )
        logger.info(f"posts.create: ok (post_id={post.id}, author_id={claims.user_id})")
        return post
