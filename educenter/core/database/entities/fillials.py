"""
Branch ("fillial") entities.

A branch is a physical location of an education center. Its subjects and
fields are linked through ``fillial_fans`` and ``fillial_sohas``.
"""

from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import TimestampedBase


class Fillial(TimestampedBase, table=True):
    """A branch of an education center.

    Table: fillials
    """

    __tablename__ = "fillials"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=255, index=True)
    phone: str = Field(max_length=20)
    location: str = Field(max_length=255)
    image: str = Field(max_length=255)
    region_id: int = Field(foreign_key="regions.id", index=True)
    edu_id: int = Field(foreign_key="edu_centers.id", ondelete="CASCADE", index=True)


class FillialFan(TimestampedBase, table=True):
    """Table: fillial_fans"""

    __tablename__ = "fillial_fans"
    __table_args__ = (
        UniqueConstraint("fillial_id", "fan_id", name="uq_fillial_fans_pair"),
        {"extend_existing": True},
    )

    fillial_id: int = Field(foreign_key="fillials.id", ondelete="CASCADE", index=True)
    fan_id: int = Field(foreign_key="fans.id", ondelete="CASCADE", index=True)


class FillialSoha(TimestampedBase, table=True):
    """Table: fillial_sohas"""

    __tablename__ = "fillial_sohas"
    __table_args__ = (
        UniqueConstraint("fillial_id", "soha_id", name="uq_fillial_sohas_pair"),
        {"extend_existing": True},
    )

    fillial_id: int = Field(foreign_key="fillials.id", ondelete="CASCADE", index=True)
    soha_id: int = Field(foreign_key="sohas.id", ondelete="CASCADE", index=True)
