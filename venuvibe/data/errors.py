"""Domain errors raised by repositories and the auth facade."""

from __future__ import annotations


class VenuVibeError(Exception):
    """Base class for every error the core raises on purpose."""


class InputValidationError(VenuVibeError, ValueError):
    """A required input is missing or empty."""


class NotFoundError(VenuVibeError, LookupError):
    """The targeted record does not exist."""


class ConflictError(VenuVibeError):
    """The record would violate a uniqueness rule (e.g. duplicate email)."""


class InvalidCredentialsError(VenuVibeError):
    """Unknown email or wrong password."""


class CorruptedDataError(VenuVibeError):
    """A stored value could not be decoded into the expected shape."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored value for {key!r} is corrupted: {reason}")
        self.key = key
        self.reason = reason
