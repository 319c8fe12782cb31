# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.users.entities import User
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> tuple[User, str]:
        user = self._users.find_by_username(username)
        if user is None:
            # Pay the hashing cost anyway; response time must not reveal the user.
            self._password_hasher.verify_dummy(password)
            raise InvalidCredentialsError()

        # Same error for unknown user and bad password.
        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id, user.username)
        return user, token
