# Overview: Service-layer role enforcement built on the single capability check.

from __future__ import annotations

import logging
from typing import Iterable

from ..permissions import has_role

logger = logging.getLogger(__name__)


class PermissionDeniedError(Exception):
    """Raised when the signed-in role lacks a capability."""
    pass


def require_role(role: str | None, allowed_roles: Iterable[str], action: str) -> None:
    """Raise PermissionDeniedError unless `role` is one of `allowed_roles`."""
    if has_role(role, allowed_roles):
        return
    logger.warning("Permission denied: role=%s action=%s", role, action)
    raise PermissionDeniedError(f"Role '{role}' may not {action}")
