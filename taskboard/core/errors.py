"""Application error taxonomy.

Every error raised by the services carries the HTTP status it maps to; the
handlers registered in ``taskboard.main`` render them as ``{"error": message}``.
"""

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class InvalidCredentials(AuthError):
    default_message = "Invalid credentials"


class InvalidToken(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    pass
