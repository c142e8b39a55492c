from fastapi import status


class AppError(Exception):
    """Base for failures that map onto a client-visible status code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class DuplicateIdentity(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email or phone number already exists"


class InvalidCredentials(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token is required"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class TokenExpired(Unauthorized):
    default_message = "Token expired"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class StoreError(AppError):
    pass
