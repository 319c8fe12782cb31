# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import CoverUpload, NewPost, Post, PostChanges


class PostRepository(Protocol):
    def add(self, post: NewPost) -> Post: ...
    def find_by_id(self, post_id: int) -> Post | None: ...
    def list_recent(self, limit: int) -> Sequence[Post]: ...
    def update(self, post_id: int, changes: PostChanges) -> Post: ...


class BlobStore(Protocol):
    def store(self, upload: CoverUpload) -> str: ...
