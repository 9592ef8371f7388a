"""
Category entity used to classify shared resources.
"""

from __future__ import annotations

from sqlmodel import Field

from ..base import TimestampedBase


class Category(TimestampedBase, table=True):
    """Resource category.

    Table: categories
    """

    __tablename__ = "categories"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=55, unique=True, index=True)
    image: str = Field(max_length=255)
