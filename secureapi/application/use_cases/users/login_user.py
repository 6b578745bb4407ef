# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from secureapi.application.interfaces import TokenIssuer
from secureapi.domain.users.entities import UserToken
from secureapi.domain.users.exceptions import (
    InvalidCredentialsError,
    MissingPasswordError,
    MissingUsernameError,
)
from secureapi.domain.users.repositories import CredentialStore
from secureapi.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        tokens: TokenIssuer,
    ) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, username: str | None, password: str | None) -> UserToken:
        # Cheap rejections first; the store is not touched for malformed input.
        if not username or not username.strip():
            raise MissingUsernameError()
        if not password:
            raise MissingPasswordError()

        user = self._users.find_by_username(username)
        # Verified even when user is None so both failures take the same time.
        verified = self._users.verify_password(user, password)
        if user is None or not verified:
            logger.info(f"auth.login: rejected username={username} known={user is not None}")
            raise InvalidCredentialsError()

        token = self._tokens.create_token(user)
        return UserToken(username=user.username, token=token)
