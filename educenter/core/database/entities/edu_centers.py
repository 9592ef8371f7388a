"""
Education center entities.

This module contains the education center listing and its many-to-many
link tables to subjects (``edu_fans``) and fields (``edu_sohas``).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import TimestampedBase


class EduCenter(TimestampedBase, table=True):
    """An education center directory listing owned by a user.

    Table: edu_centers
    """

    __tablename__ = "edu_centers"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=255, index=True)
    image: str = Field(max_length=255)
    phone: str = Field(max_length=20)
    license: str = Field(max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    region_id: int = Field(foreign_key="regions.id", index=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)

    def __repr__(self) -> str:
        return f"EduCenter(id={self.id}, name={self.name})"


class EduFan(TimestampedBase, table=True):
    """Link between an education center and a subject it teaches.

    Table: edu_fans
    """

    __tablename__ = "edu_fans"
    __table_args__ = (
        UniqueConstraint("edu_id", "fan_id", name="uq_edu_fans_pair"),
        {"extend_existing": True},
    )

    edu_id: int = Field(foreign_key="edu_centers.id", ondelete="CASCADE", index=True)
    fan_id: int = Field(foreign_key="fans.id", ondelete="CASCADE", index=True)


class EduSoha(TimestampedBase, table=True):
    """Link between an education center and a field it covers.

    Table: edu_sohas
    """

    __tablename__ = "edu_sohas"
    __table_args__ = (
        UniqueConstraint("edu_id", "soha_id", name="uq_edu_sohas_pair"),
        {"extend_existing": True},
    )

    edu_id: int = Field(foreign_key="edu_centers.id", ondelete="CASCADE", index=True)
    soha_id: int = Field(foreign_key="sohas.id", ondelete="CASCADE", index=True)
