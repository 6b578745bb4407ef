from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from secureapi.application.use_cases.users.login_user import LoginUserUseCase
from secureapi.application.use_cases.users.register_user import RegisterUserUseCase
from secureapi.domain.users.entities import User, UserError, UserToken
from secureapi.domain.users.exceptions import (
    InvalidCredentialsError,
    MissingUsernameError,
    RegistrationFailedError,
)
from secureapi.interfaces.http.controllers.auth_controller import AuthController
from secureapi.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _mount(app: Flask, *, register=None, login=None) -> None:
    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, register or MagicMock()),
        login_use_case=cast(LoginUserUseCase, login or MagicMock()),
    )
    app.register_blueprint(controller.as_blueprint())


def test_register_endpoint_returns_confirmation(flask_app: Flask) -> None:
    register_called: dict[str, tuple] = {}

    class StubRegister:
        def execute(self, username, email, password) -> User:
            register_called["args"] = (username, email, password)
            return User.new(username, email).with_password_hash("hash")

    _mount(flask_app, register=StubRegister())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@example.com", "password": "Password123!"},
        )

    assert response.status_code == 200
    assert response.get_json() == {"message": "User registered successfully!"}
    assert register_called["args"] == ("alice", "alice@example.com", "Password123!")
    assert "Set-Cookie" not in response.headers


def test_register_failure_lists_every_error(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = RegistrationFailedError(
        [
            UserError("DuplicateUserName", "Username 'alice' is already taken."),
            UserError("PasswordRequiresDigit", "Passwords must have at least one digit ('0'-'9')."),
        ]
    )
    _mount(flask_app, register=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "", "password": "Password!"},
        )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_failed"
    assert [e["code"] for e in payload["errors"]] == [
        "DuplicateUserName",
        "PasswordRequiresDigit",
    ]


def test_register_wrong_field_type_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    _mount(flask_app, register=register)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", json={"username": 42, "password": []})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["password", "username"]
    register.execute.assert_not_called()


def test_login_returns_username_and_token(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = UserToken(username="alice", token="a.b.c")
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"username": "alice", "password": "Password123!"}
        )

    assert response.status_code == 200
    assert response.get_json() == {"username": "alice", "token": "a.b.c"}
    login.execute.assert_called_once_with("alice", "Password123!")


def test_login_missing_body_reaches_use_case_as_none(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = MissingUsernameError()
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", data="not json")

    assert response.status_code == 400
    assert response.get_json()["message"] == "Username is required."
    login.execute.assert_called_once_with(None, None)


@pytest.mark.parametrize("body", ['"abc"', "[1]", "123", "null"])
def test_login_non_object_body_reads_as_empty(flask_app: Flask, body: str) -> None:
    login = MagicMock()
    login.execute.side_effect = MissingUsernameError()
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", data=body, content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["message"] == "Username is required."
    login.execute.assert_called_once_with(None, None)


def test_register_non_object_body_reads_as_empty(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = RegistrationFailedError(
        [UserError("InvalidUserName", "Username '' is invalid, can only contain letters or digits.")]
    )
    _mount(flask_app, register=register)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", data="[1, 2]", content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_failed"
    register.execute.assert_called_once_with(None, None, None)


def test_login_invalid_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"username": "alice", "password": "x"})

    assert response.status_code == 401
    assert response.get_json() == {
        "error": "invalid_credentials",
        "message": "Invalid username or password",
    }


def test_unexpected_error_is_hidden(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = RuntimeError("database password is hunter2")
    _mount(flask_app, login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"username": "alice", "password": "x"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
