"""
Repositories for likes, comments and course registrations.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.engagement import Comment, CourseRegister, Liked
from .base import AsyncCrudRepository


class LikedRepository(AsyncCrudRepository[Liked]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Liked)

    async def get_pair(self, user_id: int, edu_id: int) -> Optional[Liked]:
        """Get the like a user gave a center, if any."""
        return await self.find_one(user_id=user_id, edu_id=edu_id)


class CommentRepository(AsyncCrudRepository[Comment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Comment)


class CourseRegisterRepository(AsyncCrudRepository[CourseRegister]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CourseRegister)
