# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer token gate applied in front of protected operations.

The gate is fail-closed: anything other than a fully validated token is a
``Deny``. Deny reasons are for diagnostics only and are never shown to callers.
"""

from __future__ import annotations

from dataclasses import dataclass

from secureapi.application.interfaces import (
    DenyReason,
    TokenClaims,
    TokenValidationError,
    TokenValidator,
)
from secureapi.shared.logging import logger

BEARER_SCHEME = "bearer"


@dataclass(slots=True, frozen=True)
class Allow:
    subject: str
    claims: TokenClaims


@dataclass(slots=True, frozen=True)
class Deny:
    reason: DenyReason


AuthorizationDecision = Allow | Deny


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    credentials = credentials.strip()
    if not credentials or " " in credentials:
        return None
    return credentials


class AuthorizationGate:
    def __init__(self, *, validator: TokenValidator) -> None:
        self._validator = validator

    def authorize(self, authorization: str | None) -> AuthorizationDecision:
        token = extract_bearer_token(authorization)
        if token is None:
            return Deny(DenyReason.MISSING_CREDENTIALS)

        try:
            claims = self._validator.validate(token)
        except TokenValidationError as exc:
            logger.debug(f"auth.gate: token rejected ({exc.detail or exc.reason})")
            return Deny(exc.reason)

        return Allow(subject=claims.subject, claims=claims)


__all__ = [
    "Allow",
    "AuthorizationDecision",
    "AuthorizationGate",
    "Deny",
    "extract_bearer_token",
]
