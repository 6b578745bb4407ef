from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask, g, jsonify

from secureapi.application.interfaces import DenyReason
from secureapi.application.services.authorization import (
    Allow,
    AuthorizationGate,
    Deny,
    extract_bearer_token,
)
from secureapi.domain.users.entities import User
from secureapi.infrastructure.security.jwt_tokens import JwtTokenService
from secureapi.interfaces.http.middleware.auth_gate import require_bearer
from secureapi.shared.config import JwtConfig

KEY = "gate-signing-key-that-is-long-enough-1234"


@pytest.fixture()
def service() -> JwtTokenService:
    return JwtTokenService(JwtConfig(signing_key=KEY))


@pytest.fixture()
def gate(service: JwtTokenService) -> AuthorizationGate:
    return AuthorizationGate(validator=service)


@pytest.fixture()
def alice() -> User:
    return User.new("alice").with_password_hash("hash")


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("BEARER   abc  ", "abc"),
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer a b", None),
        ("abc.def.ghi", None),
    ],
)
def test_extract_bearer_token(header: str | None, expected: str | None) -> None:
    assert extract_bearer_token(header) == expected


def test_valid_token_is_allowed(
    gate: AuthorizationGate, service: JwtTokenService, alice: User
) -> None:
    decision = gate.authorize(f"Bearer {service.create_token(alice)}")

    assert isinstance(decision, Allow)
    assert decision.subject == "alice"
    assert decision.claims.user_id == alice.id


@pytest.mark.parametrize("header", [None, "", "Token xyz", "Bearer "])
def test_missing_credentials_are_denied(gate: AuthorizationGate, header: str | None) -> None:
    assert gate.authorize(header) == Deny(DenyReason.MISSING_CREDENTIALS)


def test_malformed_token_is_denied(gate: AuthorizationGate) -> None:
    assert gate.authorize("Bearer not-a-jwt") == Deny(DenyReason.MALFORMED_TOKEN)


def test_wrong_key_is_denied(gate: AuthorizationGate, alice: User) -> None:
    forged = JwtTokenService(JwtConfig(signing_key="z" * 40)).create_token(alice)

    assert gate.authorize(f"Bearer {forged}") == Deny(DenyReason.INVALID_SIGNATURE)


def test_expired_token_is_denied(gate: AuthorizationGate, alice: User) -> None:
    past = datetime.now(UTC) - timedelta(days=1)
    stale = JwtTokenService(JwtConfig(signing_key=KEY), clock=lambda: past).create_token(alice)

    assert gate.authorize(f"Bearer {stale}") == Deny(DenyReason.EXPIRED)


@pytest.fixture()
def guarded_app(gate: AuthorizationGate) -> tuple[Flask, list[dict]]:
    app = Flask(__name__)
    seen: list[dict] = []

    @require_bearer(gate)
    def whoami():
        seen.append(
            {
                "current_user": g.current_user,
                "user_id": g.user_id,
                "jti": g.token_claims.token_id,
            }
        )
        return jsonify({"ok": True})

    app.add_url_rule("/whoami", view_func=whoami)
    return app, seen


def test_allowed_request_exposes_identity_to_view(
    guarded_app: tuple[Flask, list[dict]], service: JwtTokenService, alice: User
) -> None:
    app, seen = guarded_app
    token = service.create_token(alice)

    response = app.test_client().get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert len(seen) == 1
    assert seen[0]["current_user"] == "alice"
    assert seen[0]["user_id"] == alice.id
    assert seen[0]["jti"] == service.validate(token).token_id


@pytest.mark.parametrize("header", [None, "Bearer not-a-jwt", "Basic dXNlcjpwYXNz"])
def test_denied_request_never_reaches_view(
    guarded_app: tuple[Flask, list[dict]], header: str | None
) -> None:
    app, seen = guarded_app
    headers = {"Authorization": header} if header else {}

    response = app.test_client().get("/whoami", headers=headers)

    assert response.status_code == 401
    assert response.data == b""
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert seen == []
