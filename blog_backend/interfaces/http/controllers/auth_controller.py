# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from blog_backend.application.use_cases.users.get_profile import GetProfileUseCase
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    LogoutResponseDTO,
    ProfileDTO,
    PublicUserDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
)
from blog_backend.interfaces.http.session_cookie import SessionCookie
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        profile_use_case: GetProfileUseCase,
        logout_use_case: LogoutUserUseCase,
        cookie: SessionCookie,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._profile_use_case = profile_use_case
        self._logout_use_case = logout_use_case
        self._cookie = cookie

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.username, dto.password)

        payload = RegisterResponseDTO(
            user=PublicUserDTO.model_validate(user.public())
        ).model_dump()
        response = jsonify(payload)
        self._cookie.attach(response, token)
        logger.info(f"auth.register: ok user_id={user.id} ip={_get_client_ip()}")
        return response, 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user, token = self._login_use_case.execute(dto.username, dto.password)
        except Exception:
            logger.info(f"auth.login: failed username={dto.username} ip={_get_client_ip()}")
            raise

        payload = LoginResponseDTO(
            user=PublicUserDTO.model_validate(user.public())
        ).model_dump()
        response = jsonify(payload)
        self._cookie.attach(response, token)
        logger.info(f"auth.login: ok user_id={user.id} ip={_get_client_ip()}")
        return response, 200

    def profile(self) -> tuple[Response, int]:
        claims = self._profile_use_case.execute(self._cookie.read(request))
        payload = ProfileDTO(
            id=claims.user_id,
            username=claims.username,
            iat=int(claims.issued_at.timestamp()),
            exp=int(claims.expires_at.timestamp()),
        ).model_dump()
        return jsonify(payload), 200

    def logout(self) -> tuple[Response, int]:
        claims = self._logout_use_case.execute(self._cookie.read(request))

        response = jsonify(LogoutResponseDTO().model_dump())
        self._cookie.clear(response)
        logger.info(f"auth.logout: ok user_id={claims.user_id if claims else None}")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/profile", view_func=self.profile, methods=["GET"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
