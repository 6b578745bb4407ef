# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from secureapi.domain.exceptions import InvariantViolation


def normalize_username(username: str) -> str:
    return username.casefold()


@dataclass(slots=True, frozen=True)
class User:
    """A registered principal.

    Holds only the salted hash of the credential. The plaintext password is
    never a field; it travels as an argument to the credential store.
    """

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.id:
            raise InvariantViolation("must not be empty", field="id")
        if not self.username or not self.username.strip():
            raise InvariantViolation("must not be blank", field="username")

    @classmethod
    def new(cls, username: str, email: str | None = None) -> User:
        return cls(
            id=uuid.uuid4().hex,
            username=username,
            email=email or "",
            password_hash="",
            created_at=datetime.now(UTC),
        )

    @property
    def normalized_username(self) -> str:
        return normalize_username(self.username)

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def with_password_hash(self, password_hash: str) -> User:
        if not password_hash:
            raise InvariantViolation("must not be empty", field="password_hash")
        return replace(self, password_hash=password_hash)


@dataclass(slots=True, frozen=True)
class UserError:

    code: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "description": self.description}


@dataclass(slots=True, frozen=True)
class IdentityResult:

    succeeded: bool
    errors: tuple[UserError, ...] = field(default=())
    user: User | None = None

    @classmethod
    def success(cls, user: User) -> IdentityResult:
        return cls(succeeded=True, user=user)

    @classmethod
    def failed(cls, errors: Iterable[UserError]) -> IdentityResult:
        errors = tuple(errors)
        if not errors:
            raise InvariantViolation("a failed result needs at least one error", field="errors")
        return cls(succeeded=False, errors=errors)


@dataclass(slots=True, frozen=True)
class UserToken:

    username: str
    token: str
