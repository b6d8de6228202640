"""
nexus.exceptions — Domain Error Taxonomy
=========================================

Services raise these; :mod:`nexus.api.main` translates every
:class:`AppException` into ``{"error": detail}`` with its status code.
"""

from __future__ import annotations

from fastapi import status


class AppException(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Something went wrong!"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppException):
    """Missing or malformed input, or an operation the caller's state forbids."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation error"


class ConflictError(AppException):
    """Duplicate of something that must be unique (email, enrollment)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Already exists"


class AuthenticationError(AppException):
    """Missing or wrong credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication failed"


class AuthorizationError(AppException):
    """A credential was presented but could not be accepted."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid token"


class NotFoundError(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class InternalError(AppException):
    """Storage failure or other unexpected condition; detail never leaks."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Something went wrong!"
