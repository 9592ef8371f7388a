"""
Device session entity.

One row per (user, client IP) pair seen at login, with the parsed
User-Agent details of the device.
"""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import TimestampedBase


class DeviceSession(TimestampedBase, table=True):
    """A device a user has logged in from.

    Table: sessions
    """

    __tablename__ = "sessions"
    __table_args__ = ({"extend_existing": True},)

    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    ip: str = Field(max_length=64)
    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
