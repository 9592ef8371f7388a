"""
Domain enumerations shared by entities, schemas and routes.
"""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Account roles recognised by authorization checks."""

    admin = "admin"
    user = "user"
    super_admin = "super-admin"
    ceo = "CEO"


class UserStatus(str, Enum):
    """Verification state of an account."""

    pending = "pending"
    active = "active"


class SortOrder(str, Enum):
    """Ordering direction accepted by list endpoints."""

    asc = "asc"
    desc = "desc"


ADMIN_ROLES: tuple[str, ...] = (UserRole.admin.value, UserRole.super_admin.value)
SELF_REGISTRATION_ROLES: tuple[str, ...] = (UserRole.user.value, UserRole.ceo.value)
