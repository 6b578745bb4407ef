# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from http import HTTPStatus
from typing import Any

from secureapi.shared.errors.base import DomainError

from .entities import UserError


class MissingUsernameError(DomainError):
    code = "missing_username"
    message = "Username is required."


class MissingPasswordError(DomainError):
    code = "missing_password"
    message = "Password is required."


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid username or password"


class RegistrationFailedError(DomainError):
    code = "validation_failed"

    def __init__(self, errors: Iterable[UserError]) -> None:
        super().__init__()
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "errors": [error.to_dict() for error in self.errors],
        }
