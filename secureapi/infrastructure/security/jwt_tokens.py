# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from secureapi.application.interfaces import (
    DenyReason,
    TokenClaims,
    TokenIssuer,
    TokenValidationError,
    TokenValidator,
)
from secureapi.domain.users.entities import User
from secureapi.shared.config import JwtConfig
from secureapi.shared.errors.base import ConfigurationError

MIN_KEY_BYTES = 32
_REQUIRED_CLAIMS = ["sub", "exp", "iat", "jti"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenIssuer, TokenValidator):
    """Issues and validates HMAC-signed JWTs with a process-wide key.

    The key and lifetime are fixed at construction; the instance is safe to
    share across request threads.
    """

    def __init__(self, config: JwtConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        key = config.signing_key or ""
        if not key.strip():
            raise ConfigurationError("JWT_SIGNING_KEY is not configured")
        if len(key.encode("utf-8")) < MIN_KEY_BYTES:
            raise ConfigurationError(
                f"JWT_SIGNING_KEY must be at least {MIN_KEY_BYTES} bytes long"
            )
        self._key = key
        self._algorithm = config.algorithm
        self._lifetime = timedelta(minutes=config.lifetime_minutes)
        self._issuer = config.issuer
        self._audience = config.audience
        self._leeway = timedelta(seconds=config.clock_skew_seconds)
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def create_token(self, user: User) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": user.username,
            "unique_name": user.username,
            "uid": user.id,
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        if self._issuer:
            payload["iss"] = self._issuer
        if self._audience:
            payload["aud"] = self._audience
        return jwt.encode(payload, self._key, algorithm=self._algorithm)

    def validate(self, token: str) -> TokenClaims:
        options: dict[str, Any] = {"require": list(_REQUIRED_CLAIMS)}
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                audience=self._audience,
                leeway=self._leeway,
                options=options,
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenValidationError(DenyReason.EXPIRED, str(exc)) from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenValidationError(DenyReason.INVALID_SIGNATURE, str(exc)) from exc
        except jwt.DecodeError as exc:
            raise TokenValidationError(DenyReason.MALFORMED_TOKEN, str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenValidationError(DenyReason.INVALID_CLAIMS, str(exc)) from exc

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenValidationError(DenyReason.INVALID_CLAIMS, "empty subject")

        return TokenClaims(
            subject=subject,
            token_id=str(payload["jti"]),
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            user_id=payload.get("uid"),
            raw=payload,
        )


__all__ = ["JwtTokenService", "MIN_KEY_BYTES"]
