"""
Education center repository.

Besides plain CRUD this repository owns the multi-row writes of a center:
the center row and its subject/field link rows are written in one
transaction, so a failure leaves no partial center behind.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from educenter.core.logging_config import get_logger

from ..base import utc_now
from ..entities.edu_centers import EduCenter, EduFan, EduSoha
from ..entities.engagement import Comment, Liked
from ..entities.fillials import Fillial
from ..entities.subjects import Fan, Soha
from .base import AsyncCrudRepository, QueryBuilder
from .links import linked_rows, replace_links

logger = get_logger(__name__)


class EduCenterRepository(AsyncCrudRepository[EduCenter]):
    """Repository for education centers and their link tables."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EduCenter)

    async def create_with_links(
        self,
        center: EduCenter,
        fan_ids: Sequence[int],
        soha_ids: Sequence[int],
    ) -> EduCenter:
        """Create a center and its subject/field links atomically.

        Args:
            center: New center instance (without id)
            fan_ids: Subject ids to link
            soha_ids: Field ids to link

        Returns:
            The persisted center
        """
        try:
            self.session.add(center)
            await self.session.flush()
            await replace_links(self.session, EduFan, "edu_id", center.id, "fan_id", fan_ids)
            await replace_links(self.session, EduSoha, "edu_id", center.id, "soha_id", soha_ids)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error("Rolled back education center creation", exc_info=True)
            raise
        await self.session.refresh(center)
        return center

    async def update_with_links(
        self,
        center: EduCenter,
        data: Dict[str, Any],
        fan_ids: Optional[Sequence[int]] = None,
        soha_ids: Optional[Sequence[int]] = None,
    ) -> EduCenter:
        """Update center fields and, when given, replace its link sets atomically."""
        edu_id = center.id
        try:
            for key, value in data.items():
                setattr(center, key, value)
            center.updated_at = utc_now()
            self.session.add(center)
            if fan_ids is not None:
                await replace_links(self.session, EduFan, "edu_id", edu_id, "fan_id", fan_ids)
            if soha_ids is not None:
                await replace_links(self.session, EduSoha, "edu_id", edu_id, "soha_id", soha_ids)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(f"Rolled back update of education center {edu_id}", exc_info=True)
            raise
        await self.session.refresh(center)
        return center

    async def page_filtered(
        self,
        *,
        name: Optional[str] = None,
        region_id: Optional[int] = None,
        fan_id: Optional[int] = None,
        soha_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[EduCenter], int]:
        """List centers by name prefix, region, subject and field."""
        stmt = select(EduCenter)
        stmt = QueryBuilder.apply_prefix(stmt, EduCenter, "name", name)
        if fan_id is not None:
            stmt = stmt.where(EduCenter.id.in_(select(EduFan.edu_id).where(EduFan.fan_id == fan_id)))
        if soha_id is not None:
            stmt = stmt.where(EduCenter.id.in_(select(EduSoha.edu_id).where(EduSoha.soha_id == soha_id)))
        rows, total = await self.page(
            stmt=stmt,
            filters={"region_id": region_id},
            limit=limit,
            offset=offset,
        )
        return list(rows), total

    async def list_fans(self, edu_id: int) -> List[Fan]:
        return await linked_rows(self.session, Fan, EduFan, "edu_id", edu_id, "fan_id")

    async def list_sohas(self, edu_id: int) -> List[Soha]:
        return await linked_rows(self.session, Soha, EduSoha, "edu_id", edu_id, "soha_id")

    async def list_fillials(self, edu_id: int) -> List[Fillial]:
        stmt = select(Fillial).where(Fillial.edu_id == edu_id).order_by(Fillial.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def rating(self, edu_id: int) -> Optional[float]:
        """Average star rating of a center, ``None`` without comments."""
        result = await self.session.execute(select(func.avg(Comment.star)).where(Comment.edu_id == edu_id))
        value = result.scalar_one_or_none()
        return round(float(value), 2) if value is not None else None

    async def like_count(self, edu_id: int) -> int:
        result = await self.session.execute(select(func.count(Liked.id)).where(Liked.edu_id == edu_id))
        return int(result.scalar_one())
