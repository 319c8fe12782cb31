from .base import AppError, DomainError, InfrastructureError, UploadFailedError, ValidationError
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "UploadFailedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
