# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, jsonify, send_from_directory
from sqlalchemy.engine import Engine

from blog_backend.infrastructure.health import check_database
from blog_backend.infrastructure.storage import LOCAL_URL_PREFIX
from blog_backend.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine, upload_root: Path | None = None) -> None:
        self._engine = engine
        self._upload_root = upload_root

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        if self._upload_root is not None:
            bp.add_url_rule(
                f"/{LOCAL_URL_PREFIX}/<path:filename>",
                view_func=self.uploaded_file,
                methods=["GET"],
            )
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except Exception as exc:  # pragma: no cover
            logger.error(f"health: database check failed ({type(exc).__name__})")
            status["ok"] = False
            status["database"] = "error"
        return jsonify(status)

    def uploaded_file(self, filename: str):
        return send_from_directory(self._upload_root.resolve(), filename)
