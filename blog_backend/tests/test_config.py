from __future__ import annotations

import pytest
from pydantic import ValidationError

from blog_backend.shared.config import AppConfig, SecurityConfig


def test_cors_origins_are_split_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ORIGIN", "http://a.test, http://b.test,")

    assert SecurityConfig().allowed_origins == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize(("raw", "expected"), [("strict", "Strict"), (" lax ", "Lax"), ("NONE", "None")])
def test_samesite_is_normalized(raw: str, expected: str) -> None:
    assert SecurityConfig(COOKIE_SAMESITE=raw, COOKIE_SECURE=True).cookie_samesite == expected


def test_production_refuses_default_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(APP_ENV="production", SECRET_KEY="dev")


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("POSTS_LIST_LIMIT", "TOKEN_TTL_SECONDS", "AUTH_COOKIE_NAME", "STORAGE_BACKEND"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(SECRET_KEY="x")

    assert config.posts.list_limit == 20
    assert config.auth.token_ttl_seconds == 3600
    assert config.auth.cookie_name == "token"
    assert config.storage.backend == "local"


def test_samesite_none_requires_secure_cookie() -> None:
    with pytest.raises(ValidationError, match="COOKIE_SECURE"):
        SecurityConfig(COOKIE_SAMESITE="None", COOKIE_SECURE=False)

    assert SecurityConfig(COOKIE_SAMESITE="None", COOKIE_SECURE=True).cookie_secure is True
