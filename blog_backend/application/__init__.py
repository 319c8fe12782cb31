# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.ownership import PostOwnershipGuard
from .use_cases.posts.create_post import CreatePostInput, CreatePostUseCase
from .use_cases.posts.list_posts import GetPostUseCase, ListRecentPostsUseCase
from .use_cases.posts.update_post import UpdatePostInput, UpdatePostUseCase
from .use_cases.users.get_profile import GetProfileUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "CreatePostInput",
    "CreatePostUseCase",
    "GetPostUseCase",
    "GetProfileUseCase",
    "ListRecentPostsUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "PostOwnershipGuard",
    "RegisterUserUseCase",
    "UpdatePostInput",
    "UpdatePostUseCase",
]
