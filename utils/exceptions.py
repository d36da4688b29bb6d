"""
Application error kinds.

Each class carries the HTTP status and the label used in the error envelope, so the
handlers in api/errors.py map by type instead of inspecting message text.
"""
from __future__ import annotations


class AppError(Exception):
    status = 500
    error = "INTERNAL_ERROR"
    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details


class BadCredentials(AppError):
    """Login failure. Same message whether the username or the password was wrong."""
    status = 401
    error = "BAD_CREDENTIALS"
    message = "Invalid username or password"


class Unauthorized(AppError):
    status = 401
    error = "UNAUTHORIZED"
    message = "Full authentication is required to access this resource"


class TokenInvalid(Unauthorized):
    message = "Invalid access token"


class AccessTokenExpired(TokenInvalid):
    message = "Access token expired"


class TokenExpired(AppError):
    status = 401
    error = "TOKEN_EXPIRED"
    message = "Refresh token was expired. Please make a new login request"


class Forbidden(AppError):
    status = 403
    error = "FORBIDDEN"
    message = "You don't have permission to access this resource"


class NotFound(AppError):
    status = 404
    error = "NOT_FOUND"
    message = "Resource not found"


class TokenNotFound(NotFound):
    message = "Refresh token not found"


class Conflict(AppError):
    status = 409
    error = "CONFLICT"
    message = "Conflict"


class UsernameTaken(Conflict):
    message = "Username is already taken"


class EmailTaken(Conflict):
    message = "Email is already in use"
