"""
Base repository and query helpers.

This module provides the generic async CRUD repository and the query
building helpers shared by every repository in the database layer.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import Select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a select statement.

        ``None`` values and unknown attributes are ignored.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_search(stmt, model: Type[EntityType], searches: Dict[str, Optional[str]]):
        """Apply case-insensitive substring matches (``LIKE %value%``).

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            searches: Mapping of field name to search text; empty values are skipped

        Returns:
            Modified select statement
        """
        for key, value in searches.items():
            if value and hasattr(model, key):
                stmt = stmt.where(getattr(model, key).ilike(f"%{value}%"))
        return stmt

    @staticmethod
    def apply_prefix(stmt, model: Type[EntityType], field: str, value: Optional[str]):
        """Restrict ``field`` to values starting with ``value``."""
        if value:
            stmt = stmt.where(getattr(model, field).ilike(f"{value}%"))
        return stmt

    @staticmethod
    def apply_order(stmt, model: Type[EntityType], order_by: str, descending: bool = False):
        """Order by ``order_by`` (falls back to the primary key), with ``id`` as tie breaker."""
        column = getattr(model, order_by, None)
        if column is None:
            column = getattr(model, "id")
        stmt = stmt.order_by(column.desc() if descending else column.asc())
        if order_by != "id":
            stmt = stmt.order_by(getattr(model, "id").asc())
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


class AsyncCrudRepository(Generic[EntityType]):
    """Async repository with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLAlchemy session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        """Persist a new entity and return it with generated fields populated."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary key, or ``None`` if not found."""
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType, data: Dict[str, Any]) -> EntityType:
        """Apply ``data`` to ``entity`` and persist it.

        Args:
            entity: Loaded entity instance
            data: Field values to set (typically ``model_dump(exclude_unset=True)``)

        Returns:
            Updated entity instance
        """
        for key, value in data.items():
            setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: EntityType) -> None:
        """Delete a loaded entity."""
        await self.session.delete(entity)
        await self.session.commit()

    async def exists(self, entity_id: Optional[int]) -> bool:
        """Whether a row with the given primary key exists."""
        if entity_id is None:
            return False
        return await self.get_by_id(entity_id) is not None

    async def find_one(self, **filters: Any) -> Optional[EntityType]:
        """Get the first entity matching all equality filters."""
        stmt = QueryBuilder.apply_filters(select(self.model), self.model, filters)
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def missing_ids(self, ids: Iterable[int]) -> List[int]:
        """Return the subset of ``ids`` that has no matching row, sorted."""
        wanted = set(ids)
        if not wanted:
            return []
        stmt = select(self.model.id).where(self.model.id.in_(wanted))
        result = await self.session.execute(stmt)
        found = set(result.scalars().all())
        return sorted(wanted - found)

    async def count(self, stmt: Select) -> int:
        """Count the rows a select statement would return, ignoring its ordering and paging."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).limit(None).offset(None).subquery())
        result = await self.session.execute(count_stmt)
        return int(result.scalar_one())

    async def page(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        searches: Optional[Dict[str, Optional[str]]] = None,
        order_by: str = "id",
        descending: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        stmt: Optional[Select] = None,
    ) -> Tuple[Sequence[EntityType], int]:
        """List entities with filtering, searching, ordering and pagination.

        Args:
            filters: Equality filters
            searches: Substring searches
            order_by: Column to sort by
            descending: Sort direction
            limit: Maximum records to return
            offset: Records to skip
            stmt: Optional pre-built select statement to start from

        Returns:
            Tuple of (entities on the requested page, total matching count)
        """
        stmt = stmt if stmt is not None else select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        if searches:
            stmt = QueryBuilder.apply_search(stmt, self.model, searches)

        total = await self.count(stmt)

        stmt = QueryBuilder.apply_order(stmt, self.model, order_by, descending)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
