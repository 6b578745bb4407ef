# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///secureapi.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(**_SECTION_CONFIG)

    def is_in_memory(self) -> bool:
        return self.url in ("sqlite://", "sqlite:///:memory:")


class JwtConfig(BaseSettings):
    signing_key: str = Field("", alias="JWT_SIGNING_KEY")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    lifetime_minutes: int = Field(180, ge=1, alias="JWT_LIFETIME_MINUTES")
    issuer: str | None = Field(None, alias="JWT_ISSUER")
    audience: str | None = Field(None, alias="JWT_AUDIENCE")
    clock_skew_seconds: int = Field(0, ge=0, alias="JWT_CLOCK_SKEW_SECONDS")

    model_config = SettingsConfigDict(**_SECTION_CONFIG, frozen=True)

    @field_validator("algorithm")
    @classmethod
    def _symmetric_only(cls, value: str) -> str:
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError("only HMAC algorithms are supported")
        return value


class PasswordPolicyConfig(BaseSettings):
    min_length: int = Field(6, ge=1, alias="PASSWORD_MIN_LENGTH")
    required_unique_chars: int = Field(1, ge=1, alias="PASSWORD_REQUIRED_UNIQUE_CHARS")
    require_digit: bool = Field(True, alias="PASSWORD_REQUIRE_DIGIT")
    require_lowercase: bool = Field(True, alias="PASSWORD_REQUIRE_LOWERCASE")
    require_uppercase: bool = Field(True, alias="PASSWORD_REQUIRE_UPPERCASE")
    require_non_alphanumeric: bool = Field(True, alias="PASSWORD_REQUIRE_NON_ALPHANUMERIC")
    allowed_username_characters: str = Field(
        "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._@+",
        alias="USERNAME_ALLOWED_CHARACTERS",
    )
    username_max_length: int = Field(256, ge=1, le=256, alias="USERNAME_MAX_LENGTH")

    model_config = SettingsConfigDict(**_SECTION_CONFIG)

    @field_validator(
        "require_digit",
        "require_lowercase",
        "require_uppercase",
        "require_non_alphanumeric",
        mode="before",
    )
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: list[str] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(**_SECTION_CONFIG)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_hsts(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _jwt_config_factory() -> JwtConfig:
    return JwtConfig()  # type: ignore[call-arg]


def _password_policy_config_factory() -> PasswordPolicyConfig:
    return PasswordPolicyConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    jwt: JwtConfig = Field(default_factory=_jwt_config_factory)
    password_policy: PasswordPolicyConfig = Field(
        default_factory=_password_policy_config_factory
    )
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.database.is_in_memory():
            warnings.append("⚠️  In-memory database: registered users are lost on restart")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "JwtConfig",
    "PasswordPolicyConfig",
    "SecurityConfig",
    "load_config",
]
