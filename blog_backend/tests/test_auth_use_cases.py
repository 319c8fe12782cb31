from __future__ import annotations

from datetime import timedelta

import pytest

from blog_backend.application.services.password_hashing import WerkzeugPasswordHasher
from blog_backend.application.use_cases.users.get_profile import GetProfileUseCase
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.entities import User
from blog_backend.domain.users.exceptions import (
    InvalidCredentialsError,
    UnauthenticatedError,
    UsernameTakenError,
)
from blog_backend.domain.users.repositories import PasswordHasher, UserRepository
from blog_backend.infrastructure.auth.tokens import JwtTokenService


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)

    def find_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users.values() if u.id == user_id), None)

    def add(self, user: User) -> User:
        if user.username in self._users:
            raise UsernameTakenError()
        new_user = User(
            id=self._seq,
            username=user.username,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.username] = new_user
        return new_user


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"

    def verify_dummy(self, password: str) -> None:
        self.verify(password, "hashed:")


class SpyHasher(DeterministicHasher):
    def __init__(self) -> None:
        self.calls: list[str] = []

    def verify(self, password: str, hashed: str) -> bool:
        self.calls.append("verify")
        return super().verify(password, hashed)

    def verify_dummy(self, password: str) -> None:
        self.calls.append("verify_dummy")


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> JwtTokenService:
    return JwtTokenService(secret="test-secret", ttl=timedelta(hours=1))


@pytest.fixture()
def register(users: InMemoryUserRepository, tokens: JwtTokenService) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, tokens=tokens, password_hasher=DeterministicHasher())


@pytest.fixture()
def login(users: InMemoryUserRepository, tokens: JwtTokenService) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=tokens, password_hasher=DeterministicHasher())


def test_register_user_success(
    register: RegisterUserUseCase, users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    user, token = register.execute("alice", "secret123")

    assert user.username == "alice"
    assert user.password_hash == "hashed:secret123"
    assert users.find_by_username("alice") is not None
    assert tokens.verify(token).user_id == user.id


def test_register_user_duplicate_raises_and_keeps_first(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    first, _ = register.execute("alice", "secret123")

    with pytest.raises(UsernameTakenError):
        register.execute("alice", "other-password")

    stored = users.find_by_username("alice")
    assert stored == first
    assert stored.password_hash == "hashed:secret123"


def test_login_token_subject_matches_stored_user(
    register: RegisterUserUseCase, login: LoginUserUseCase, tokens: JwtTokenService
) -> None:
    registered, _ = register.execute("alice", "secret123")

    user, token = login.execute("alice", "secret123")

    claims = tokens.verify(token)
    assert user.id == registered.id
    assert claims.user_id == registered.id
    assert claims.username == "alice"


def test_login_unknown_user_and_wrong_password_are_indistinguishable(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    register.execute("alice", "secret123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("alice", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute("bob", "secret123")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert int(wrong_password.value.status) == 400


def test_login_unknown_user_still_checks_a_password_hash(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    hasher = SpyHasher()
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsError):
        login.execute("ghost", "secret123")

    assert hasher.calls == ["verify_dummy"]


def test_werkzeug_hasher_verifies_and_runs_dummy_check() -> None:
    hasher = WerkzeugPasswordHasher("pbkdf2:sha256:1000")
    hashed = hasher.hash("secret123")

    assert hasher.verify("secret123", hashed)
    assert not hasher.verify("wrong", hashed)
    assert hasher.verify_dummy("secret123") is None


def test_profile_returns_claims(register: RegisterUserUseCase, tokens: JwtTokenService) -> None:
    user, token = register.execute("alice", "secret123")

    claims = GetProfileUseCase(tokens=tokens).execute(token)

    assert (claims.user_id, claims.username) == (user.id, "alice")


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_profile_rejects_missing_or_garbage_token(tokens: JwtTokenService, token) -> None:
    with pytest.raises(UnauthenticatedError):
        GetProfileUseCase(tokens=tokens).execute(token)


def test_logout_never_raises(register: RegisterUserUseCase, tokens: JwtTokenService) -> None:
    user, token = register.execute("alice", "secret123")
    logout = LogoutUserUseCase(tokens=tokens)

    assert logout.execute(token).user_id == user.id
    assert logout.execute("garbage") is None
    assert logout.execute(None) is None
