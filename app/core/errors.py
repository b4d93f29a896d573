"""Application error taxonomy.

Every foreseeable failure is raised as an ``AppError`` subclass. The exception
handlers registered in ``app.main`` render them as ``{"code", "message"}`` with
the class's status code; anything else becomes ``INTERNAL_SERVER_ERROR``.
"""

from fastapi import status


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or unusable."""


class AppError(Exception):
    """Base class for errors that map to a fixed API error body."""

    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class InvalidCredentials(AppError):
    code = "INVALID_CREDENTIALS"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid username or password."


class InvalidId(AppError):
    code = "INVALID_ID"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid id."


class InvalidToken(AppError):
    code = "INVALID_TOKEN"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or expired token."


class EmailTokenMismatch(InvalidToken):
    """Email-verification token does not match the stored one."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email confirmation token."


class Unauthorized(AppError):
    code = "UNAUTHORIZED_ACCESS"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized access."


class NotFound(AppError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found."


class Conflict(AppError):
    """Uniqueness violation on create/update."""

    status_code = status.HTTP_400_BAD_REQUEST


class UsernameInUse(Conflict):
    code = "USERNAME_ALREADY_IN_USE"
    message = "Username is already in use."


class EmailInUse(Conflict):
    code = "EMAIL_ALREADY_IN_USE"
    message = "Email is already in use."


class EmailAlreadyConfirmed(AppError):
    code = "EMAIL_ALREADY_CONFIRMED"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email is already confirmed."


class InternalError(AppError):
    pass
