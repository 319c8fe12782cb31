# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from blog_backend.domain.posts.entities import Post
from blog_backend.domain.posts.repositories import PostRepository


class ListRecentPostsUseCase:
    def __init__(self, *, posts: PostRepository, max_items: int = 20) -> None:
        self._posts = posts
        self._max_items = max_items

    def execute(self, limit: int | None = None) -> Sequence[Post]:
        effective = self._max_items if limit is None else max(0, min(limit, self._max_items))
        if effective == 0:
            return []
        return self._posts.list_recent(effective)


class GetPostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, post_id: int) -> Post | None:
        return self._posts.find_by_id(post_id)
