# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from blog_backend.application.services.ownership import PostOwnershipGuard
from blog_backend.application.services.password_hashing import WerkzeugPasswordHasher
from blog_backend.application.use_cases.posts.create_post import CreatePostUseCase
from blog_backend.application.use_cases.posts.list_posts import (
    GetPostUseCase,
    ListRecentPostsUseCase,
)
from blog_backend.application.use_cases.posts.update_post import UpdatePostUseCase
from blog_backend.application.use_cases.users.get_profile import GetProfileUseCase
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.posts.repositories import BlobStore
from blog_backend.infrastructure.auth.tokens import JwtTokenService
from blog_backend.infrastructure.db import build_engine, build_session_factory
from blog_backend.infrastructure.repositories.posts.sqlalchemy_post_repository import (
    SqlAlchemyPostRepository,
)
from blog_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from blog_backend.infrastructure.storage import build_blob_store
from blog_backend.interfaces.http.controllers.auth_controller import AuthController
from blog_backend.interfaces.http.controllers.misc_controller import MiscController
from blog_backend.interfaces.http.controllers.posts_controller import PostsController
from blog_backend.interfaces.http.session_cookie import SessionCookie
from blog_backend.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    # Infrastructure

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self.config.auth.password_hash_method)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self.config.secret_key,
            ttl=timedelta(seconds=self.config.auth.token_ttl_seconds),
        )

    @cached_property
    def blob_store(self) -> BlobStore:
        return build_blob_store(self.config.storage)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def post_repository(self) -> SqlAlchemyPostRepository:
        return SqlAlchemyPostRepository(self.session_factory)

    @cached_property
    def ownership_guard(self) -> PostOwnershipGuard:
        return PostOwnershipGuard(tokens=self.token_service)

    # Auth use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(tokens=self.token_service)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(tokens=self.token_service)

    # Post use cases

    @cached_property
    def create_post_use_case(self) -> CreatePostUseCase:
        return CreatePostUseCase(
            posts=self.post_repository,
            blobs=self.blob_store,
            guard=self.ownership_guard,
        )

    @cached_property
    def update_post_use_case(self) -> UpdatePostUseCase:
        return UpdatePostUseCase(
            posts=self.post_repository,
            blobs=self.blob_store,
            guard=self.ownership_guard,
        )

    @cached_property
    def list_posts_use_case(self) -> ListRecentPostsUseCase:
        return ListRecentPostsUseCase(
            posts=self.post_repository,
            max_items=self.config.posts.list_limit,
        )

    @cached_property
    def get_post_use_case(self) -> GetPostUseCase:
        return GetPostUseCase(posts=self.post_repository)

    # HTTP

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie(
            name=self.config.auth.cookie_name,
            max_age=self.config.auth.token_ttl_seconds,
            samesite=self.config.security.cookie_samesite,
            secure=self.config.security.cookie_secure,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            profile_use_case=self.get_profile_use_case,
            logout_use_case=self.logout_user_use_case,
            cookie=self.session_cookie,
        )

    @cached_property
    def posts_controller(self) -> PostsController:
        return PostsController(
            create_use_case=self.create_post_use_case,
            update_use_case=self.update_post_use_case,
            list_use_case=self.list_posts_use_case,
            get_use_case=self.get_post_use_case,
            guard=self.ownership_guard,
            cookie=self.session_cookie,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        upload_root = None
        if self.config.storage.backend == "local":
            upload_root = self.config.storage.upload_dir
        return MiscController(engine=self.engine, upload_root=upload_root)
