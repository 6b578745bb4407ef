# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Registration rules for usernames and passwords.

Every rule reports its own ``UserError`` so callers can show all problems at
once instead of the first one found.
"""

from __future__ import annotations

from secureapi.domain.users.entities import UserError
from secureapi.shared.config import PasswordPolicyConfig


class UserErrorDescriber:
    @staticmethod
    def invalid_user_name(username: str) -> UserError:
        return UserError(
            code="InvalidUserName",
            description=f"Username '{username}' is invalid, can only contain letters or digits.",
        )

    @staticmethod
    def duplicate_user_name(username: str) -> UserError:
        return UserError(
            code="DuplicateUserName",
            description=f"Username '{username}' is already taken.",
        )

    @staticmethod
    def password_too_short(length: int) -> UserError:
        return UserError(
            code="PasswordTooShort",
            description=f"Passwords must be at least {length} characters.",
        )

    @staticmethod
    def password_requires_unique_chars(unique_chars: int) -> UserError:
        return UserError(
            code="PasswordRequiresUniqueChars",
            description=f"Passwords must use at least {unique_chars} different characters.",
        )

    @staticmethod
    def password_requires_non_alphanumeric() -> UserError:
        return UserError(
            code="PasswordRequiresNonAlphanumeric",
            description="Passwords must have at least one non alphanumeric character.",
        )

    @staticmethod
    def password_requires_digit() -> UserError:
        return UserError(
            code="PasswordRequiresDigit",
            description="Passwords must have at least one digit ('0'-'9').",
        )

    @staticmethod
    def password_requires_lower() -> UserError:
        return UserError(
            code="PasswordRequiresLower",
            description="Passwords must have at least one lowercase ('a'-'z').",
        )

    @staticmethod
    def password_requires_upper() -> UserError:
        return UserError(
            code="PasswordRequiresUpper",
            description="Passwords must have at least one uppercase ('A'-'Z').",
        )


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_ascii_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_ascii_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_letter_or_digit(ch: str) -> bool:
    return _is_ascii_digit(ch) or _is_ascii_lower(ch) or _is_ascii_upper(ch)


class UsernameValidator:
    def __init__(self, policy: PasswordPolicyConfig, describer: UserErrorDescriber | None = None) -> None:
        self._allowed = frozenset(policy.allowed_username_characters)
        self._max_length = policy.username_max_length
        self._describer = describer or UserErrorDescriber()

    def validate(self, username: str) -> list[UserError]:
        if not username or not username.strip():
            return [self._describer.invalid_user_name(username or "")]
        # Bounded by the users.username column width.
        if len(username) > self._max_length:
            return [self._describer.invalid_user_name(username)]
        if self._allowed and any(ch not in self._allowed for ch in username):
            return [self._describer.invalid_user_name(username)]
        return []


class PasswordValidator:
    def __init__(self, policy: PasswordPolicyConfig, describer: UserErrorDescriber | None = None) -> None:
        self._policy = policy
        self._describer = describer or UserErrorDescriber()

    def validate(self, password: str) -> list[UserError]:
        policy = self._policy
        describe = self._describer
        password = password or ""
        errors: list[UserError] = []

        if len(password) < policy.min_length:
            errors.append(describe.password_too_short(policy.min_length))
        if policy.require_non_alphanumeric and all(_is_letter_or_digit(ch) for ch in password):
            errors.append(describe.password_requires_non_alphanumeric())
        if policy.require_digit and not any(_is_ascii_digit(ch) for ch in password):
            errors.append(describe.password_requires_digit())
        if policy.require_lowercase and not any(_is_ascii_lower(ch) for ch in password):
            errors.append(describe.password_requires_lower())
        if policy.require_uppercase and not any(_is_ascii_upper(ch) for ch in password):
            errors.append(describe.password_requires_upper())
        if policy.required_unique_chars > len(set(password)):
            errors.append(describe.password_requires_unique_chars(policy.required_unique_chars))

        return errors


__all__ = ["PasswordValidator", "UserErrorDescriber", "UsernameValidator"]
