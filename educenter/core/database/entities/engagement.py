"""
User engagement entities: course registrations, comments and likes.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field

from ..base import TimestampedBase


class CourseRegister(TimestampedBase, table=True):
    """A user's registration for a subject at a branch of a center.

    Table: course_registers
    """

    __tablename__ = "course_registers"
    __table_args__ = ({"extend_existing": True},)

    edu_id: int = Field(foreign_key="edu_centers.id", ondelete="CASCADE", index=True)
    soha_id: int = Field(foreign_key="sohas.id", ondelete="CASCADE")
    fan_id: int = Field(foreign_key="fans.id", ondelete="CASCADE")
    fillial_id: int = Field(foreign_key="fillials.id", ondelete="CASCADE")
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)


class Comment(TimestampedBase, table=True):
    """A review with a 0-5 star rating left on an education center.

    Table: comments
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint("star >= 0 AND star <= 5", name="ck_comments_star_range"),
        {"extend_existing": True},
    )

    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    edu_id: int = Field(foreign_key="edu_centers.id", ondelete="CASCADE", index=True)
    comment: str = Field(max_length=250)
    star: int = Field(ge=0, le=5)


class Liked(TimestampedBase, table=True):
    """A user's like of an education center.

    Table: likes
    """

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_id", "edu_id", name="uq_likes_user_edu"),
        {"extend_existing": True},
    )

    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    edu_id: int = Field(foreign_key="edu_centers.id", ondelete="CASCADE", index=True)
