"""
Custom exceptions for the authlib session server.
"""

from __future__ import annotations


class AuthlibError(Exception):
    """Base exception carrying the HTTP status it maps to."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class KeyStorageError(AuthlibError):
    """Key directory or key file could not be created, read or written."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class KeyFormatError(AuthlibError):
    """An on-disk key could not be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class SigningError(AuthlibError):
    """Signature could not be produced or verified."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class InvalidInputError(AuthlibError):
    """Exception for invalid signer input."""


class MalformedRequestError(AuthlibError):
    """Exception for missing or malformed request fields."""


class MissingUsernameError(AuthlibError):
    """Exception for a hasJoined query without a username."""


class ProfileMismatchError(AuthlibError):
    """Exception for a token vouching for somebody else's profile."""


class UnauthenticatedError(AuthlibError):
    """Exception for a missing or invalid bearer token."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class ProfileNotFoundError(AuthlibError):
    """Exception for an unknown profile UUID."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)
