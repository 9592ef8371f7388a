"""
Branch (fillial) repository with transactional link-table maintenance.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from educenter.core.logging_config import get_logger

from ..base import utc_now
from ..entities.fillials import Fillial, FillialFan, FillialSoha
from ..entities.subjects import Fan, Soha
from .base import AsyncCrudRepository, QueryBuilder
from .links import linked_rows, replace_links

logger = get_logger(__name__)


class FillialRepository(AsyncCrudRepository[Fillial]):
    """Repository for branches of education centers."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Fillial)

    async def create_with_links(
        self,
        fillial: Fillial,
        fan_ids: Sequence[int],
        soha_ids: Sequence[int],
    ) -> Fillial:
        """Create a branch and its subject/field links in one transaction."""
        try:
            self.session.add(fillial)
            await self.session.flush()
            await replace_links(self.session, FillialFan, "fillial_id", fillial.id, "fan_id", fan_ids)
            await replace_links(self.session, FillialSoha, "fillial_id", fillial.id, "soha_id", soha_ids)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error("Rolled back branch creation", exc_info=True)
            raise
        await self.session.refresh(fillial)
        return fillial

    async def update_with_links(
        self,
        fillial: Fillial,
        data: Dict[str, Any],
        fan_ids: Optional[Sequence[int]] = None,
        soha_ids: Optional[Sequence[int]] = None,
    ) -> Fillial:
        """Update branch fields and optionally replace its link sets."""
        fillial_id = fillial.id
        try:
            for key, value in data.items():
                setattr(fillial, key, value)
            fillial.updated_at = utc_now()
            self.session.add(fillial)
            if fan_ids is not None:
                await replace_links(self.session, FillialFan, "fillial_id", fillial_id, "fan_id", fan_ids)
            if soha_ids is not None:
                await replace_links(self.session, FillialSoha, "fillial_id", fillial_id, "soha_id", soha_ids)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(f"Rolled back update of branch {fillial_id}", exc_info=True)
            raise
        await self.session.refresh(fillial)
        return fillial

    async def page_filtered(
        self,
        *,
        name: Optional[str] = None,
        edu_id: Optional[int] = None,
        region_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Fillial], int]:
        """List branches by name prefix, center and region."""
        stmt = QueryBuilder.apply_prefix(select(Fillial), Fillial, "name", name)
        rows, total = await self.page(
            stmt=stmt,
            filters={"edu_id": edu_id, "region_id": region_id},
            limit=limit,
            offset=offset,
        )
        return list(rows), total

    async def list_fans(self, fillial_id: int) -> List[Fan]:
        return await linked_rows(self.session, Fan, FillialFan, "fillial_id", fillial_id, "fan_id")

    async def list_sohas(self, fillial_id: int) -> List[Soha]:
        return await linked_rows(self.session, Soha, FillialSoha, "fillial_id", fillial_id, "soha_id")
