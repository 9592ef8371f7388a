"""
Region endpoints.

Regions are public reference data; only admins can change them.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.regions import Region
from educenter.core.database.repositories.base import AsyncCrudRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import SortOrder
from educenter.core.models.io.catalog import RegionCreate, RegionRead, RegionUpdate
from educenter.core.models.io.common import Page
from educenter.server.api.deps import AdminUser, PaginationDep, parse_sort_order
from educenter.server.core.errors import BusinessRuleError, NotFoundError

logger = get_logger(__name__)

router = APIRouter(tags=["regions"])


def _repo(session: AsyncSession) -> AsyncCrudRepository[Region]:
    return AsyncCrudRepository(session, Region)


async def _get_region(repo: AsyncCrudRepository[Region], region_id: int) -> Region:
    region = await repo.get_by_id(region_id)
    if region is None:
        raise NotFoundError("Region not found")
    return region


async def _ensure_unique_name(repo: AsyncCrudRepository[Region], name: str, region_id: Optional[int] = None) -> None:
    existing = await repo.find_one(name=name)
    if existing is not None and existing.id != region_id:
        raise BusinessRuleError("Region already exists")


@router.get(
    "",
    response_model=Page[RegionRead],
    summary="List Regions",
    description="Public list of regions with name search, sorted by name.",
)
async def list_regions(
    pagination: PaginationDep,
    search: Optional[str] = None,
    sort: Optional[str] = Query(default=None, description="asc or desc"),
    session: AsyncSession = Depends(get_session),
) -> Page[RegionRead]:
    rows, total = await _repo(session).page(
        searches={"name": search},
        order_by="name",
        descending=parse_sort_order(sort) is SortOrder.desc,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[RegionRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[RegionRead.model_validate(row) for row in rows],
    )


@router.get("/{region_id}", response_model=RegionRead, summary="Get Region")
async def get_region(region_id: int, session: AsyncSession = Depends(get_session)) -> RegionRead:
    return RegionRead.model_validate(await _get_region(_repo(session), region_id))


@router.post(
    "",
    response_model=RegionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Region",
    responses={400: {"description": "Region already exists"}},
)
async def create_region(
    body: RegionCreate,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> RegionRead:
    repo = _repo(session)
    await _ensure_unique_name(repo, body.name)
    region = await repo.create(Region(name=body.name))
    logger.info(f"Created region {region.id} ({region.name})")
    return RegionRead.model_validate(region)


@router.patch("/{region_id}", response_model=RegionRead, summary="Update Region")
async def update_region(
    region_id: int,
    body: RegionUpdate,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> RegionRead:
    repo = _repo(session)
    region = await _get_region(repo, region_id)
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in data:
        await _ensure_unique_name(repo, data["name"], region_id)
    region = await repo.update(region, data)
    logger.info(f"Updated region {region_id}")
    return RegionRead.model_validate(region)


@router.delete("/{region_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Region")
async def delete_region(
    region_id: int,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = _repo(session)
    await repo.delete(await _get_region(repo, region_id))
    logger.info(f"Deleted region {region_id}")
