from __future__ import annotations

from pydantic import BaseModel, Field


class PostFormDTO(BaseModel):
    title: str = Field(min_length=1, max_length=256)
    summary: str = Field(min_length=1, max_length=1024)
    content: str = Field(min_length=1)


class PostUpdateFormDTO(PostFormDTO):
    # Legacy clients echo the post id in the form body.
    id: int | None = None
