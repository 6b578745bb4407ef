# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Response, g, request

from secureapi.application.services.authorization import Allow, AuthorizationGate
from secureapi.shared.logging import logger


def _unauthorized() -> Response:
    response = Response(status=401)
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


def require_bearer(gate: AuthorizationGate) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Request stage that runs the authorization gate before the wrapped view.

    Routes opt in explicitly by being wrapped when they are registered.
    """

    def decorator(view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            decision = gate.authorize(request.headers.get("Authorization"))
            if not isinstance(decision, Allow):
                logger.warning(
                    f"auth.gate: deny reason={decision.reason} on {request.method} {request.path}"
                )
                return _unauthorized()

            g.current_user = decision.subject
            g.user_id = decision.claims.user_id
            g.token_claims = decision.claims
            logger.debug(f"auth.gate: allow user={decision.subject} {request.method} {request.path}")
            return view(*args, **kwargs)

        return inner

    return decorator


__all__ = ["require_bearer"]
