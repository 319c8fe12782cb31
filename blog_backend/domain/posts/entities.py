# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO


@dataclass(slots=True, frozen=True)
class Post:
    id: int
    title: str
    summary: str
    content: str
    cover: str
    author_id: int
    author_username: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": self.content,
            "cover": self.cover,
            "author": {"id": self.author_id, "username": self.author_username},
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class NewPost:
    title: str
    summary: str
    content: str
    cover: str
    author_id: int


@dataclass(slots=True, frozen=True)
class PostChanges:
    """Mutable fields of a post; ``cover`` of None keeps the stored locator."""

    title: str
    summary: str
    content: str
    cover: str | None = None


@dataclass(slots=True, frozen=True)
class CoverUpload:
    filename: str
    content_type: str
    stream: BinaryIO

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot and ext.isalnum() else ""
