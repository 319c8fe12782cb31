# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .posts.entities import CoverUpload, NewPost, Post, PostChanges
from .posts.exceptions import PostNotFoundError
from .users.entities import SessionClaims, User
from .users.exceptions import (
    ForbiddenError,
    InvalidCredentialsError,
    UnauthenticatedError,
    UsernameTakenError,
)

__all__ = [
    "CoverUpload",
    "ForbiddenError",
    "InvalidCredentialsError",
    "NewPost",
    "Post",
    "PostChanges",
    "PostNotFoundError",
    "SessionClaims",
    "UnauthenticatedError",
    "User",
    "UsernameTakenError",
]
