"""
VenuVibe — Auth Service.

Sign-up, sign-in, sign-out and current-user lookup on top of the user
repository. Every sign-up is appended to the all-users collection, and
sign-in verifies the password against a stored bcrypt hash. The current
user is a copy of the user record kept under its own storage key.

Methods are async for the benefit of callers; none of them awaits anything.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import bcrypt
from pydantic import ValidationError

from venuvibe.data.db import UserDB
from venuvibe.data.errors import (
    ConflictError,
    CorruptedDataError,
    InputValidationError,
    InvalidCredentialsError,
)
from venuvibe.data.ids import new_id
from venuvibe.data.models import User
from venuvibe.data.storage import JsonStorage, StorageKeys

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int) -> str:
    """Hash a plain password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # Malformed salt in the stored hash
        return False


def _require_credentials(email: str | None, password: str | None) -> None:
    if not email or not password:
        raise InputValidationError("Email and password are required")


class AuthService:
    """Authentication facade over UserDB and the current-user key."""

    def __init__(
        self,
        storage: JsonStorage,
        users: UserDB | None = None,
        bcrypt_rounds: int | None = None,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        if bcrypt_rounds is None:
            from venuvibe.config import settings
            bcrypt_rounds = settings.BCRYPT_ROUNDS

        self._storage = storage
        self._users = users if users is not None else UserDB(storage)
        self._rounds = bcrypt_rounds
        self._new_id = id_factory

    def _set_current(self, user: User) -> None:
        self._storage.write_object(StorageKeys.CURRENT_USER, user.to_json_dict())

    async def sign_up(self, email: str, password: str) -> User:
        """Register a new user and make them the current user.

        Raises:
            InputValidationError: email or password is empty.
            ConflictError: a user with this email already exists.
            CorruptedDataError: the users or credentials collection is unreadable;
                nothing is stored.
        """
        _require_credentials(email, password)

        with self._storage.locked(StorageKeys.USERS):
            if self._users.find_by_email(email) is not None:
                raise ConflictError("User already exists")

            user = User(id=self._new_id(), email=email)
            password_hash = hash_password(password, self._rounds)
            self._users.register(user, password_hash)

        self._set_current(user)
        logger.info("Signed up %s", user.id)
        return user

    async def sign_in(self, email: str, password: str) -> User:
        """Verify credentials and make the matching user current.

        Raises:
            InputValidationError: email or password is empty.
            InvalidCredentialsError: unknown email or wrong password.
        """
        _require_credentials(email, password)

        user = self._users.find_by_email(email)
        if user is None:
            logger.warning("Sign-in failed: unknown email")
            raise InvalidCredentialsError("Invalid credentials")

        password_hash = self._users.get_password_hash(user.id)
        if password_hash is None or not verify_password(password, password_hash):
            logger.warning("Sign-in failed for user %s", user.id)
            raise InvalidCredentialsError("Invalid credentials")

        self._set_current(user)
        logger.info("Signed in %s", user.id)
        return user

    async def sign_out(self) -> None:
        """Clear the current user. Safe to call when nobody is signed in."""
        self._storage.remove(StorageKeys.CURRENT_USER)
        logger.info("Signed out")

    async def get_current_user(self) -> User | None:
        """Return the current user, or None when nobody is signed in.

        Raises:
            CorruptedDataError: the stored value is not a valid user record.
        """
        data = self._storage.read_object(StorageKeys.CURRENT_USER)
        if data is None:
            return None
        try:
            return User.model_validate(data)
        except ValidationError as exc:
            raise CorruptedDataError(StorageKeys.CURRENT_USER, "invalid user record") from exc
