from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from secureapi.app import create_app
from secureapi.container import Container
from secureapi.domain.users.entities import User
from secureapi.shared.config import AppConfig, DatabaseConfig, JwtConfig

SIGNING_KEY = "test-signing-key-0123456789-abcdefghijklmnop"
TEST_USERNAME = "testuser"
TEST_PASSWORD = "Password123!"


@pytest.fixture()
def jwt_config() -> JwtConfig:
    return JwtConfig(signing_key=SIGNING_KEY, lifetime_minutes=60)


@pytest.fixture()
def app_config(jwt_config: JwtConfig) -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url="sqlite://"),
        jwt=jwt_config,
    )


@pytest.fixture()
def app(app_config: AppConfig) -> Iterator[Flask]:
    flask_app = create_app(app_config)
    flask_app.config.update(TESTING=True)
    container: Container = flask_app.extensions["secureapi"]

    seeded = container.credential_store.create_user(
        User.new(TEST_USERNAME, "test@example.com"), TEST_PASSWORD
    )
    assert seeded.succeeded

    yield flask_app

    container.engine.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
