# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from secureapi.application.services.user_validation import UserErrorDescriber
from secureapi.domain.exceptions import InvariantViolation
from secureapi.domain.users.entities import User
from secureapi.domain.users.exceptions import RegistrationFailedError
from secureapi.domain.users.repositories import CredentialStore
from secureapi.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        describer: UserErrorDescriber | None = None,
    ) -> None:
        self._users = users
        self._describer = describer or UserErrorDescriber()

    def execute(self, username: str | None, email: str | None, password: str | None) -> User:
        try:
            shell = User.new(username or "", email)
        except InvariantViolation:
            raise RegistrationFailedError(
                [self._describer.invalid_user_name(username or "")]
            ) from None

        result = self._users.create_user(shell, password or "")
        if not result.succeeded or result.user is None:
            codes = ",".join(error.code for error in result.errors)
            logger.info(f"auth.register: failed username={shell.username} errors={codes}")
            raise RegistrationFailedError(result.errors)

        return result.user
