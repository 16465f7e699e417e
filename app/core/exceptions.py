"""Domain errors.

Services raise these; the handlers registered in ``app.main`` turn every
``AppError`` into the same client-error JSON shape.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a client-error response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error: str = "Bad request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    error = "Validation failed"


class AuthenticationRequired(ValidationError):
    def __init__(self, message: str = "User must be logged in to use AI"):
        super().__init__(message)


class InvalidRole(ValidationError):
    def __init__(self, role: str):
        super().__init__(f"Unknown role '{role}'. Allowed: USER, ADMIN")
        self.role = role


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class UserNotFound(NotFound):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class AdminNotFound(NotFound):
    error = "Admin not found"

    def __init__(self, message: str = "Admin not found"):
        super().__init__(message)


class AccessDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Access denied"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class SelfDeletionForbidden(AppError):
    error = "Invalid operation"

    def __init__(self, message: str = "An admin cannot delete their own account"):
        super().__init__(message)


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)
