# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from secureapi.application.services.user_validation import (
    PasswordValidator,
    UserErrorDescriber,
    UsernameValidator,
)
from secureapi.domain.users.entities import IdentityResult, User, normalize_username
from secureapi.domain.users.repositories import CredentialStore, PasswordHasher
from secureapi.infrastructure.db.models import UserRecord
from secureapi.infrastructure.unit_of_work import unit_of_work_scope
from secureapi.shared.errors.base import CredentialStoreUnavailableError
from secureapi.shared.logging import logger


def _to_domain(row: UserRecord) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email or "",
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyCredentialStore(CredentialStore):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        password_hasher: PasswordHasher,
        username_validator: UsernameValidator,
        password_validator: PasswordValidator,
        describer: UserErrorDescriber | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._hasher = password_hasher
        self._username_validator = username_validator
        self._password_validator = password_validator
        self._describer = describer or UserErrorDescriber()
        self._dummy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def find_by_username(self, username: str) -> User | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = (
                    session.query(UserRecord)
                    .filter(UserRecord.normalized_username == normalize_username(username))
                    .first()
                )
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"credential_store.find_by_username: {type(exc).__name__}")
            raise CredentialStoreUnavailableError("find_by_username") from exc

    def create_user(self, user: User, password: str) -> IdentityResult:
        errors = self._username_validator.validate(user.username)
        if not errors and self._exists(user.normalized_username):
            errors.append(self._describer.duplicate_user_name(user.username))
        errors.extend(self._password_validator.validate(password))
        if errors:
            return IdentityResult.failed(errors)

        stored = user.with_password_hash(self._hasher.hash(password))
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.add(
                    UserRecord(
                        id=stored.id,
                        username=stored.username,
                        normalized_username=stored.normalized_username,
                        email=stored.email,
                        password_hash=stored.password_hash,
                        created_at=stored.created_at,
                    )
                )
                session.flush()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same name.
            logger.info(f"credential_store.create_user: unique violation username={user.username}")
            return IdentityResult.failed([self._describer.duplicate_user_name(user.username)])
        except SQLAlchemyError as exc:
            logger.error(f"credential_store.create_user: {type(exc).__name__}")
            raise CredentialStoreUnavailableError("create_user") from exc

        logger.info(f"credential_store.create_user: ok user_id={stored.id}")
        return IdentityResult.success(stored)

    def verify_password(self, user: User | None, password: str) -> bool:
        if user is None or not user.has_password:
            # Unknown users cost one hash check like everyone else.
            self._hasher.verify(password, self._dummy_hash)
            return False
        return self._hasher.verify(password, user.password_hash)

    def _exists(self, normalized_username: str) -> bool:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                return (
                    session.query(UserRecord.id)
                    .filter(UserRecord.normalized_username == normalized_username)
                    .first()
                    is not None
                )
        except SQLAlchemyError as exc:
            logger.error(f"credential_store.exists: {type(exc).__name__}")
            raise CredentialStoreUnavailableError("create_user") from exc
