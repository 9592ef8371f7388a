"""
Subject ("fan") and field ("soha") classification entities.
"""

from __future__ import annotations

from sqlmodel import Field

from ..base import TimestampedBase


class Fan(TimestampedBase, table=True):
    """A subject taught at education centers.

    Table: fans
    """

    __tablename__ = "fans"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=100, index=True)
    image: str = Field(max_length=255)


class Soha(TimestampedBase, table=True):
    """A field of study grouping subjects.

    Table: sohas
    """

    __tablename__ = "sohas"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=100, index=True)
    image: str = Field(max_length=255)
