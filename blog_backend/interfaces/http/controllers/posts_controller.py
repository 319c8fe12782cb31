# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from blog_backend.application.services.ownership import PostOwnershipGuard
from blog_backend.application.use_cases.posts.create_post import (
    CreatePostInput,
    CreatePostUseCase,
)
from blog_backend.application.use_cases.posts.list_posts import (
    GetPostUseCase,
    ListRecentPostsUseCase,
)
from blog_backend.application.use_cases.posts.update_post import (
    UpdatePostInput,
    UpdatePostUseCase,
)
from blog_backend.domain.posts.entities import CoverUpload
from blog_backend.interfaces.http.dto.posts import PostFormDTO, PostUpdateFormDTO
from blog_backend.interfaces.http.session_cookie import SessionCookie
from blog_backend.shared.errors import ValidationError as AppValidationError
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger


def _cover_from_request() -> CoverUpload | None:
    file = request.files.get("file")
    if file is None or not file.filename:
        return None
    if not (file.mimetype or "").startswith("image/"):
        raise AppValidationError("cover_not_image", context={"content_type": file.mimetype})
    return CoverUpload(filename=file.filename, content_type=file.mimetype, stream=file.stream)


class PostsController:
    def __init__(
        self,
        *,
        create_use_case: CreatePostUseCase,
        update_use_case: UpdatePostUseCase,
        list_use_case: ListRecentPostsUseCase,
        get_use_case: GetPostUseCase,
        guard: PostOwnershipGuard,
        cookie: SessionCookie,
    ) -> None:
        self._create_use_case = create_use_case
        self._update_use_case = update_use_case
        self._list_use_case = list_use_case
        self._get_use_case = get_use_case
        self._guard = guard
        self._cookie = cookie

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("posts", __name__)
        bp.add_url_rule("/post", view_func=self.list_posts, methods=["GET"])
        bp.add_url_rule("/post", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/post", view_func=self.update, methods=["PUT"])
        bp.add_url_rule("/post/<int:post_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule("/post/<int:post_id>", view_func=self.update, methods=["PUT"])
        return bp

    def list_posts(self) -> tuple[Response, int]:
        t0 = perf_counter()
        limit = request.args.get("limit", type=int)
        items = self._list_use_case.execute(limit)
        dt = (perf_counter() - t0) * 1000
        logger.info(f"posts.list: ok (n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([post.to_dict() for post in items]), 200

    def get(self, post_id: int) -> tuple[Response, int]:
        post = self._get_use_case.execute(post_id)
        if post is None:
            logger.info(f"posts.get: missing (post_id={post_id})")
        return jsonify(post.to_dict() if post else None), 200

    def create(self) -> tuple[Response, int]:
        token = self._cookie.read(request)
        # Anonymous callers get 401 before any form details are echoed back.
        self._guard.authenticate(token)
        try:
            dto = PostFormDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        post = self._create_use_case.execute(
            token,
            CreatePostInput(
                title=dto.title,
                summary=dto.summary,
                content=dto.content,
                cover=_cover_from_request(),
            ),
        )
        return jsonify(post.to_dict()), 200

    def update(self, post_id: int | None = None) -> tuple[Response, int]:
        token = self._cookie.read(request)
        self._guard.authenticate(token)
        try:
            dto = PostUpdateFormDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        if post_id is not None and dto.id is not None and dto.id != post_id:
            raise AppValidationError("id_mismatch", context={"path": post_id, "body": dto.id})
        target_id = post_id if post_id is not None else dto.id
        if target_id is None:
            raise AppValidationError("id_required")

        post = self._update_use_case.execute(
            token,
            UpdatePostInput(
                post_id=target_id,
                title=dto.title,
                summary=dto.summary,
                content=dto.content,
                cover=_cover_from_request(),
            ),
        )
        return jsonify(post.to_dict()), 200
