"""Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe
to show to the caller. ``main.py`` renders them as ``{"msg": ...}``.
"""


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Fill in all fields."


class DuplicateEmail(AppError):
    status_code = 400
    default_message = "Email already registered."


class InvalidCredentials(AppError):
    status_code = 400
    default_message = "Invalid credentials."


class UserNotFound(AppError):
    status_code = 400
    default_message = "User not found."


class CodeMismatch(AppError):
    status_code = 400
    default_message = "Invalid code."


class CodeExpired(AppError):
    status_code = 400
    default_message = "Code expired."


class EmailDeliveryError(AppError):
    status_code = 500
    default_message = "Error sending email."


class TokenMissing(AppError):
    status_code = 401
    default_message = "Access denied."


class TokenInvalid(AppError):
    status_code = 403
    default_message = "Invalid token."


class StoreError(AppError):
    """Underlying persistence failure."""

    status_code = 500
    default_message = "Server error."
