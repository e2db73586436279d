# Overview: Service-layer operations for auth; credential verification behind an interface.

"""
Credential Verification

WHY: Callers depend on CredentialVerifier only, so the static demo table can
be replaced by a real verifier without touching the session code.

SECURITY NOTES:
- The demo table is hashed with bcrypt when the verifier is built; plaintext
  passwords are not kept on the verifier
- Returned identities never carry a password
"""

from __future__ import annotations

import abc

import bcrypt

from ..models import Identity


class AuthenticationError(Exception):
    """Raised when an email/password pair does not match any account."""
    pass


# Demo accounts: (id, name, email, password, role)
MOCK_USERS = [
    ("1", "Admin User", "admin@boutique.com", "admin123", "admin"),
    ("2", "Cashier User", "cashier@boutique.com", "cashier123", "cashier"),
    ("3", "Manager User", "manager@boutique.com", "manager123", "manager"),
]


def hash_password(password: str, rounds: int = 12) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    WHY timing-safe: bcrypt.checkpw() prevents timing attacks automatically.
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


class CredentialVerifier(abc.ABC):
    @abc.abstractmethod
    def verify(self, email: str, password: str) -> Identity | None:
        """Return the matching identity, or None when the credentials are wrong."""

    @abc.abstractmethod
    def list_identities(self) -> list[Identity]:
        """All known accounts, for the admin-only user access panel."""


class StaticCredentialVerifier(CredentialVerifier):
    """Exact email match plus password check against a fixed account table."""

    def __init__(self, users=MOCK_USERS, *, rounds: int = 12):
        self._accounts: dict[str, tuple[Identity, str]] = {}
        for user_id, name, email, password, role in users:
            identity = Identity(id=user_id, name=name, email=email, role=role)
            self._accounts[email] = (identity, hash_password(password, rounds=rounds))

    def verify(self, email: str, password: str) -> Identity | None:
        account = self._accounts.get(email)
        if account is None:
            return None
        identity, password_hash = account
        if not verify_password(password, password_hash):
            return None
        return identity

    def list_identities(self) -> list[Identity]:
        return [identity for identity, _hash in self._accounts.values()]
