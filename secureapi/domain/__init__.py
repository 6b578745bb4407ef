# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation, InvariantViolationError
from .users.entities import IdentityResult, User, UserError, UserToken, normalize_username

__all__ = [
    "IdentityResult",
    "InvariantViolation",
    "InvariantViolationError",
    "User",
    "UserError",
    "UserToken",
    "normalize_username",
]
