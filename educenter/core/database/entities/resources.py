"""
Resource ("resurs") entity: learning material shared by users.
"""

from __future__ import annotations

from sqlmodel import Field

from ..base import TimestampedBase


class Resource(TimestampedBase, table=True):
    """A shared learning resource.

    Table: resources
    """

    __tablename__ = "resources"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=55, index=True)
    media: str = Field(max_length=255)
    description: str
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    category_id: int = Field(foreign_key="categories.id", ondelete="CASCADE", index=True)
