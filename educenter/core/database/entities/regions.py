"""
Region entity.

Regions are the administrative areas users, education centers and branches
belong to.
"""

from __future__ import annotations

from sqlmodel import Field

from ..base import TimestampedBase


class Region(TimestampedBase, table=True):
    """A geographic region.

    Table: regions
    """

    __tablename__ = "regions"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=55, unique=True, index=True)

    def __repr__(self) -> str:
        return f"Region(id={self.id}, name={self.name})"
