"""
Domain exceptions.

Routes and services raise these instead of building HTTP responses; the
exception handlers translate each class to its status code.
"""

from __future__ import annotations

from fastapi import status


class DomainError(Exception):
    """Base class for errors reported to API clients as ``{"detail": message}``."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN


class AuthenticationError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UploadRejectedError(DomainError):
    """Uploaded file failed type or size validation."""

    status_code = status.HTTP_400_BAD_REQUEST
