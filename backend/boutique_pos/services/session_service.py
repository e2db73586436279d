# Overview: Service-layer operations for the signed-in session; identity persisted to local storage.

from __future__ import annotations

import logging
import time

from ..models import Identity
from .auth_service import AuthenticationError, CredentialVerifier
from .storage_service import USER_KEY, LocalStorage

logger = logging.getLogger(__name__)


class SessionService:
    """
    Holds the current identity for the single local operator.

    The identity (without password) is restored from storage on load() and
    written back on every login/logout.
    """

    def __init__(self, storage: LocalStorage, verifier: CredentialVerifier, *, login_delay: float = 0.5):
        self.storage = storage
        self.verifier = verifier
        self.login_delay = login_delay
        self._user: Identity | None = None

    def load(self) -> None:
        saved = self.storage.get_item(USER_KEY)
        self._user = Identity.from_dict(saved) if saved else None
        if self._user:
            logger.info("Session restored for %s", self._user.email)

    def close(self) -> None:
        self._user = None

    @property
    def current_user(self) -> Identity | None:
        return self._user

    @property
    def role(self) -> str | None:
        return self._user.role if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def login(self, email: str, password: str) -> Identity:
        """
        Check credentials after a simulated round-trip.

        Raises AuthenticationError on mismatch; the previous session (if any)
        is left untouched in that case.
        """
        if self.login_delay > 0:
            time.sleep(self.login_delay)

        identity = self.verifier.verify(email, password)
        if identity is None:
            logger.warning("Login failed for %s", email)
            raise AuthenticationError("Invalid email or password")

        self._user = identity
        self.storage.set_item(USER_KEY, identity.to_dict())
        logger.info("Login: %s (%s)", identity.email, identity.role)
        return identity

    def logout(self) -> None:
        if self._user:
            logger.info("Logout: %s", self._user.email)
        self._user = None
        self.storage.remove_item(USER_KEY)
