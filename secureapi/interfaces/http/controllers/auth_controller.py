# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from secureapi.application.use_cases.users.login_user import LoginUserUseCase
from secureapi.application.use_cases.users.register_user import RegisterUserUseCase
from secureapi.interfaces.http.dto.auth import (
    LoginRequestDTO,
    RegisterRequestDTO,
    RegisterSuccessDTO,
    UserTokenDTO,
)
from secureapi.shared.errors.validation import raise_validation_error
from secureapi.shared.logging import logger


def _json_object() -> dict:
    # Anything other than a JSON object reads as an empty form.
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_json_object())
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.email, dto.password)

        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(RegisterSuccessDTO().model_dump()), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_object())
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.username, dto.password)

        logger.info(f"auth.login: ok username={result.username}")
        payload = UserTokenDTO(username=result.username, token=result.token).model_dump()
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
