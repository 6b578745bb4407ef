# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import IdentityResult, User


class CredentialStore(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def create_user(self, user: User, password: str) -> IdentityResult: ...
    def verify_password(self, user: User | None, password: str) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
