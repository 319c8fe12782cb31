# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from blog_backend.domain.users.entities import User
from blog_backend.domain.users.exceptions import UsernameTakenError
from blog_backend.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class RegisterUserUseCase:
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
        existing = self._users.find_by_username(username)
        if existing:
            raise UsernameTakenError()
        hashed = self._password_hasher.hash(password)
        user = User(id=0, username=username, password_hash=hashed, created_at=datetime.now(UTC))
        persisted = self._users.add(user)
        token = self._tokens.issue(persisted.id, persisted.username)
        return persisted, token
