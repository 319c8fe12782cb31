# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy.orm import joinedload

from blog_backend.domain.posts.entities import NewPost, PostChanges
from blog_backend.domain.posts.entities import Post as DomainPost
from blog_backend.domain.posts.exceptions import PostNotFoundError
from blog_backend.domain.posts.repositories import PostRepository
from blog_backend.infrastructure.db.models import Post
from blog_backend.infrastructure.db.session import SessionFactory, session_scope


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on read; stored values are always UTC.
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _to_domain(row: Post) -> DomainPost:
    return DomainPost(
        id=row.id,
        title=row.title,
        summary=row.summary,
        content=row.content,
        cover=row.cover,
        author_id=row.author_id,
        author_username=row.author.username,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


class SqlAlchemyPostRepository(PostRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, post: NewPost) -> DomainPost:
        with session_scope(self._session_factory) as session:
            row = Post(
                title=post.title,
                summary=post.summary,
                content=post.content,
                cover=post.cover,
                author_id=post.author_id,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def find_by_id(self, post_id: int) -> DomainPost | None:
        with session_scope(self._session_factory) as session:
            row = (
                session.query(Post)
                .options(joinedload(Post.author))
                .filter(Post.id == post_id)
                .first()
            )
            if not row:
                return None
            return _to_domain(row)

    def list_recent(self, limit: int) -> Sequence[DomainPost]:
        with session_scope(self._session_factory) as session:
            rows = (
                session.query(Post)
                .options(joinedload(Post.author))
                .order_by(Post.created_at.desc(), Post.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_domain(row) for row in rows]

    def update(self, post_id: int, changes: PostChanges) -> DomainPost:
        with session_scope(self._session_factory) as session:
            row = session.get(Post, post_id, with_for_update=True)
            if not row:
                raise PostNotFoundError(post_id)
            row.title = changes.title
            row.summary = changes.summary
            row.content = changes.content
            if changes.cover is not None:
                row.cover = changes.cover
            session.flush()
            session.refresh(row)
            return _to_domain(row)
