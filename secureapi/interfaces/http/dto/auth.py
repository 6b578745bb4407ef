from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class LoginRequestDTO(BaseModel):
    # Presence is checked by the login use case so the messages stay stable.
    username: str | None = None
    password: str | None = None

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=False)


class RegisterRequestDTO(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(extra="ignore")


class UserTokenDTO(BaseModel):
    username: str
    token: str


class RegisterSuccessDTO(BaseModel):
    message: str = "User registered successfully!"
