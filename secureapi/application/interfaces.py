# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, Protocol

from secureapi.domain.users.entities import User


class DenyReason(StrEnum):
    MISSING_CREDENTIALS = "missing_credentials"
    MALFORMED_TOKEN = "malformed_token"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    INVALID_CLAIMS = "invalid_claims"


class TokenValidationError(Exception):
    def __init__(self, reason: DenyReason, detail: str = "") -> None:
        super().__init__(f"{reason}: {detail}" if detail else str(reason))
        self.reason = reason
        self.detail = detail


@dataclass(slots=True, frozen=True)
class TokenClaims:
    subject: str
    token_id: str
    issued_at: datetime
    expires_at: datetime
    user_id: str | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


class TokenIssuer(Protocol):
    def create_token(self, user: User) -> str: ...


class TokenValidator(Protocol):
    def validate(self, token: str) -> TokenClaims: ...
