from .base import (
    AppError,
    ConfigurationError,
    CredentialStoreUnavailableError,
    DomainError,
    InfrastructureError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ConfigurationError",
    "CredentialStoreUnavailableError",
    "DomainError",
    "InfrastructureError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
