# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from secureapi.application.services.authorization import AuthorizationGate
from secureapi.interfaces.http.middleware.auth_gate import require_bearer

PRODUCTS: tuple[dict[str, object], ...] = (
    {"id": 1, "name": "Notebook"},
    {"id": 2, "name": "Mouse sem fio"},
    {"id": 3, "name": "Teclado Mecânico"},
)


class ProductsController:
    def __init__(self, *, gate: AuthorizationGate) -> None:
        self._gate = gate

    def list_products(self) -> tuple[Response, int]:
        return jsonify([dict(product) for product in PRODUCTS]), 200

    def as_blueprint(self) -> Blueprint:
        protected = require_bearer(self._gate)
        bp = Blueprint("products", __name__, url_prefix="/api/products")
        bp.add_url_rule("", view_func=protected(self.list_products), methods=["GET"])
        return bp
