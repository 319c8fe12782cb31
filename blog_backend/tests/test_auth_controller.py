from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from blog_backend.application.use_cases.users.get_profile import GetProfileUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.entities import SessionClaims, User
from blog_backend.domain.users.exceptions import UnauthenticatedError
from blog_backend.interfaces.http.controllers.auth_controller import AuthController
from blog_backend.interfaces.http.session_cookie import SessionCookie
from blog_backend.shared.middleware.error_handler import configure_error_handling

COOKIE = SessionCookie(name="token", max_age=3600)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _controller(**overrides) -> AuthController:
    kwargs = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "profile_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "cookie": COOKIE,
    }
    kwargs.update(overrides)
    return AuthController(**kwargs)


def test_register_endpoint_sets_cookie(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, username: str, password: str) -> tuple[User, str]:
            register_called["args"] = (username, password)
            return (
                User(
                    id=1,
                    username=username,
                    password_hash="hash",
                    created_at=datetime.now(UTC),
                ),
                "token123",
            )

    controller = _controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/register", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "secret123")
    assert response.get_json() == {"user": {"id": 1, "username": "alice"}}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("token=token123")
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    login = MagicMock()
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"username": "a"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_failed"
    assert "password" in payload["context"]["fields"]
    login.execute.assert_not_called()


def test_profile_without_cookie_returns_401(flask_app: Flask) -> None:
    class StubProfile:
        def execute(self, token: str | None) -> SessionClaims:
            assert token is None
            raise UnauthenticatedError()

    controller = _controller(profile_use_case=cast(GetProfileUseCase, StubProfile()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/profile")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthenticated"}


def test_profile_returns_claims(flask_app: Flask) -> None:
    issued = datetime(2025, 1, 1, tzinfo=UTC)
    profile = MagicMock()
    profile.execute.return_value = SessionClaims(
        user_id=3,
        username="carol",
        issued_at=issued,
        expires_at=issued + timedelta(hours=1),
    )
    flask_app.register_blueprint(_controller(profile_use_case=profile).as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("token", "abc")
        response = client.get("/profile")

    assert response.status_code == 200
    assert response.get_json() == {
        "id": 3,
        "username": "carol",
        "iat": int(issued.timestamp()),
        "exp": int(issued.timestamp()) + 3600,
    }
    profile.execute.assert_called_once_with("abc")


def test_logout_clears_cookie(flask_app: Flask) -> None:
    logout = MagicMock()
    logout.execute.return_value = None
    flask_app.register_blueprint(_controller(logout_use_case=logout).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/logout")

    assert response.status_code == 200
    assert response.get_json() == {"message": "Logged out successfully"}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("token=;")
    assert "Max-Age=0" in cookie
