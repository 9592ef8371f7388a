"""
User account entity.

Stores identity, contact details, role and verification status. Passwords
are kept only as bcrypt hashes.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from educenter.core.models.domain.enums import UserRole, UserStatus

from ..base import TimestampedBase


class User(TimestampedBase, table=True):
    """Registered account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    full_name: str = Field(max_length=55)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    phone: str = Field(max_length=20, unique=True, index=True)
    role: str = Field(default=UserRole.user.value, max_length=20, index=True)
    year: int = Field(description="Birth year")
    status: str = Field(default=UserStatus.pending.value, max_length=20)
    region_id: Optional[int] = Field(default=None, foreign_key="regions.id", ondelete="SET NULL")

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active.value

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
