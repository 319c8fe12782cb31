from __future__ import annotations

from pathlib import Path

import pytest
from flask import Flask

from blog_backend.app import create_app
from blog_backend.shared.config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    StorageConfig,
)


@pytest.fixture()
def app_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppConfig:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "app.log"))
    return AppConfig(
        SECRET_KEY="integration-secret",
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'blog.db'}"),
        # Fast hashing keeps the suite quick; production uses scrypt.
        auth=AuthConfig(PASSWORD_HASH_METHOD="pbkdf2:sha256:1000"),
        storage=StorageConfig(STORAGE_BACKEND="local", UPLOAD_DIR=tmp_path / "uploads"),
    )


@pytest.fixture()
def app(app_config: AppConfig) -> Flask:
    application = create_app(app_config)
    application.config.update(TESTING=True)
    yield application
    application.extensions["container"].engine.dispose()
