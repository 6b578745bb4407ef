# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from secureapi.application.services.authorization import AuthorizationGate
from secureapi.application.services.password_hashing import WerkzeugPasswordHasher
from secureapi.application.services.user_validation import (
    PasswordValidator,
    UserErrorDescriber,
    UsernameValidator,
)
from secureapi.application.use_cases.users.login_user import LoginUserUseCase
from secureapi.application.use_cases.users.register_user import RegisterUserUseCase
from secureapi.infrastructure.db import build_engine, build_session_factory
from secureapi.infrastructure.repositories.users.sqlalchemy_credential_store import (
    SqlAlchemyCredentialStore,
)
from secureapi.infrastructure.security.jwt_tokens import JwtTokenService
from secureapi.interfaces.http.controllers.auth_controller import AuthController
from secureapi.interfaces.http.controllers.misc_controller import MiscController
from secureapi.interfaces.http.controllers.products_controller import ProductsController
from secureapi.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def error_describer(self) -> UserErrorDescriber:
        return UserErrorDescriber()

    @cached_property
    def credential_store(self) -> SqlAlchemyCredentialStore:
        policy = self.config.password_policy
        return SqlAlchemyCredentialStore(
            self.session_factory,
            password_hasher=self.password_hasher,
            username_validator=UsernameValidator(policy, self.error_describer),
            password_validator=PasswordValidator(policy, self.error_describer),
            describer=self.error_describer,
        )

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(self.config.jwt)

    @cached_property
    def authorization_gate(self) -> AuthorizationGate:
        return AuthorizationGate(validator=self.token_service)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.credential_store,
            describer=self.error_describer,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.credential_store,
            tokens=self.token_service,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def products_controller(self) -> ProductsController:
        return ProductsController(gate=self.authorization_gate)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
