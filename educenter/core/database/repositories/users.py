"""
User and device session repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.device_sessions import DeviceSession
from ..entities.users import User
from .base import AsyncCrudRepository


class UserRepository(AsyncCrudRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by e-mail address, ignoring case."""
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def get_by_phone(self, phone: str) -> Optional[User]:
        """Get a user by exact phone number."""
        return await self.find_one(phone=phone)


class DeviceSessionRepository(AsyncCrudRepository[DeviceSession]):
    """Repository for login device sessions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DeviceSession)

    async def find(self, user_id: int, ip: str) -> Optional[DeviceSession]:
        """Get the session recorded for a user from a given IP address."""
        return await self.find_one(user_id=user_id, ip=ip)

    async def list_for_user(self, user_id: int) -> List[DeviceSession]:
        """All sessions of a user, oldest first."""
        stmt = select(DeviceSession).where(DeviceSession.user_id == user_id).order_by(DeviceSession.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
