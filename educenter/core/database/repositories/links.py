"""
Helpers for maintaining many-to-many link tables.

Education centers and branches both own sets of subjects (fan) and fields
(soha) stored in link tables. The helpers here replace such sets and read
the linked rows back.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Type

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from .base import AsyncCrudRepository, EntityType


async def replace_links(
    session: AsyncSession,
    link_model: Type[SQLModel],
    owner_field: str,
    owner_id: int,
    target_field: str,
    target_ids: Iterable[int],
) -> None:
    """Make the link set of ``owner_id`` equal to ``target_ids``.

    Does not commit; callers run it inside their own unit of work.
    """
    await session.execute(delete(link_model).where(getattr(link_model, owner_field) == owner_id))
    for target_id in sorted(set(target_ids)):
        session.add(link_model(**{owner_field: owner_id, target_field: target_id}))


async def linked_rows(
    session: AsyncSession,
    target_model: Type[SQLModel],
    link_model: Type[SQLModel],
    owner_field: str,
    owner_id: int,
    target_field: str,
) -> List[SQLModel]:
    """Rows of ``target_model`` linked to ``owner_id``, ordered by id."""
    stmt = (
        select(target_model)
        .join(link_model, getattr(link_model, target_field) == target_model.id)
        .where(getattr(link_model, owner_field) == owner_id)
        .order_by(target_model.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


class LinkRepository(AsyncCrudRepository[EntityType]):
    """Repository for a center-to-target link table such as ``edu_fans``."""

    def __init__(self, session: AsyncSession, model: Type[EntityType], target_field: str) -> None:
        super().__init__(session, model)
        self.target_field = target_field

    async def get_pair(self, edu_id: int, target_id: int) -> Optional[EntityType]:
        """Get the link between a center and a target, if present."""
        return await self.find_one(edu_id=edu_id, **{self.target_field: target_id})
