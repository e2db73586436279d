"""
Role Gate Constants and Capability Check

WHY: Role checks used to be repeated string comparisons at every call site.
All role sets and the single capability check live here.

DESIGN PRINCIPLES:
- Fail closed: an unknown or missing role has no capabilities
- Capabilities are named role sets, checked by has_role() only
"""

from __future__ import annotations

from typing import Iterable


# =============================================================================
# ROLES
# =============================================================================

class Role:
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"


ALL_ROLES = frozenset({Role.ADMIN, Role.MANAGER, Role.CASHIER})


# =============================================================================
# CAPABILITIES
# =============================================================================

VIEW_REPORTS = frozenset({Role.ADMIN, Role.MANAGER})
EXPORT_REPORTS = VIEW_REPORTS
VIEW_CASHIER_PERFORMANCE = frozenset({Role.ADMIN, Role.MANAGER})
MANAGE_SETTINGS = frozenset({Role.ADMIN, Role.MANAGER})
VIEW_USER_ACCESS = frozenset({Role.ADMIN})


# =============================================================================
# NAVIGATION
# =============================================================================

# Each item is defined as: (code, name, path, allowed roles)
NAV_ITEMS = [
    ("dashboard", "Dashboard", "/dashboard", ALL_ROLES),
    ("products", "Products", "/products", ALL_ROLES),
    ("sales", "Sales", "/sales", ALL_ROLES),
    ("reports", "Reports", "/reports", VIEW_REPORTS),
    ("settings", "Settings", "/settings", MANAGE_SETTINGS),
]


def has_role(role: str | None, allowed_roles: Iterable[str]) -> bool:
    """True when `role` is one of `allowed_roles`. None never matches.

    A bare string is treated as a single role, not as a set of characters.
    """
    if role is None:
        return False
    if isinstance(allowed_roles, str):
        return role == allowed_roles
    return role in frozenset(allowed_roles)


def visible_nav_items(role: str | None) -> list[dict]:
    """Navigation entries the given role may see, in menu order."""
    return [
        {"code": code, "name": name, "path": path}
        for code, name, path, allowed in NAV_ITEMS
        if has_role(role, allowed)
    ]


def can_access_route(role: str | None, code: str) -> bool:
    for item_code, _name, _path, allowed in NAV_ITEMS:
        if item_code == code:
            return has_role(role, allowed)
    return False
