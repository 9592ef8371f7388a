"""
Resource repository.

Listings join the author's full name and the category name onto each row.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.categories import Category
from ..entities.resources import Resource
from ..entities.users import User
from .base import AsyncCrudRepository, QueryBuilder

ResourceRow = Tuple[Resource, Optional[str], Optional[str]]


class ResourceRepository(AsyncCrudRepository[Resource]):
    """Repository for shared resources."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Resource)

    def _detail_statement(self):
        return (
            select(Resource, User.full_name, Category.name)
            .join(User, User.id == Resource.user_id, isouter=True)
            .join(Category, Category.id == Resource.category_id, isouter=True)
        )

    async def get_with_details(self, resource_id: int) -> Optional[ResourceRow]:
        """Get a resource together with author name and category name."""
        stmt = self._detail_statement().where(Resource.id == resource_id)
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1], row[2]) if row else None

    async def page_with_details(
        self,
        *,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[ResourceRow], int]:
        """List resources sorted by name, with author and category names."""
        stmt = self._detail_statement()
        stmt = QueryBuilder.apply_search(stmt, Resource, {"name": search})
        stmt = QueryBuilder.apply_filters(stmt, Resource, {"category_id": category_id})

        total = await self.count(stmt)

        stmt = QueryBuilder.apply_order(stmt, Resource, "name", descending)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()], total
