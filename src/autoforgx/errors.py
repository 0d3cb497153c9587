from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request carries no valid token.

    The message is the same for every cause (missing, malformed, forged, expired).
    """

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class InvalidCredentialsError(UserError):
    """Raised when login fails. Does not reveal whether the email exists."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class DuplicateIdentityError(UserError):
    """Raised when registering an email that is already taken."""

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class UnknownCourseError(NotFoundError):
    """Raised when a course id does not resolve in the catalog."""

    def __init__(self, message: str = "Course not found") -> None:
        super().__init__(message)


class AlreadyOwnedError(UserError):
    """Raised when purchasing a course the user already owns."""

    def __init__(self, message: str = "Course already purchased") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class StorageUnavailableError(Exception):
    """Raised when the database cannot serve a request. Not retried."""

    def __init__(self, message: str = "Storage unavailable") -> None:
        super().__init__(message)
