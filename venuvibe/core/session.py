"""
VenuVibe — Auth Session.

Explicit session object handed to whatever needs the signed-in user,
instead of every caller reading the current-user key on its own.
Lifecycle: load() once at startup, sign_in/sign_up to authenticate,
sign_out to clear.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from venuvibe.core.auth import AuthService
    from venuvibe.data.models import User

logger = logging.getLogger(__name__)


class AuthSession:
    """Holds the signed-in user plus loading and error state."""

    def __init__(self, auth: AuthService) -> None:
        self._auth = auth
        self.user: User | None = None
        self.is_loading = True
        self.error: Exception | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def load(self) -> User | None:
        """Resolve the stored current user. Failures are kept in `error`, not raised."""
        self.is_loading = True
        try:
            self.user = await self._auth.get_current_user()
            self.error = None
        except Exception as exc:
            logger.error("Failed to load current user: %s", exc)
            self.user = None
            self.error = exc
        finally:
            self.is_loading = False
        return self.user

    async def sign_up(self, email: str, password: str) -> User:
        self.user = await self._auth.sign_up(email, password)
        self.error = None
        return self.user

    async def sign_in(self, email: str, password: str) -> User:
        self.user = await self._auth.sign_in(email, password)
        self.error = None
        return self.user

    async def sign_out(self) -> None:
        await self._auth.sign_out()
        self.user = None
        self.error = None
