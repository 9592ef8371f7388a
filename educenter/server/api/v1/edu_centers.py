"""
Education center endpoints.

A center belongs to the CEO (or admin) who created it. Its subjects and
fields are stored in link tables written in the same transaction as the
center itself.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.edu_centers import EduCenter
from educenter.core.database.entities.regions import Region
from educenter.core.database.entities.subjects import Fan, Soha
from educenter.core.database.repositories.base import AsyncCrudRepository
from educenter.core.database.repositories.edu_centers import EduCenterRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import ADMIN_ROLES, UserRole
from educenter.core.models.io.catalog import RegionRead, SubjectRead
from educenter.core.models.io.common import Page
from educenter.core.models.io.edu_centers import (
    EduCenterCreate,
    EduCenterDetail,
    EduCenterRead,
    EduCenterUpdate,
    FillialRead,
)
from educenter.server.api.deps import CurrentUser, PaginationDep, ensure_owner_or_admin, require_roles
from educenter.server.core.errors import BusinessRuleError, NotFoundError
from educenter.server.core.security import TokenPayload

logger = get_logger(__name__)

router = APIRouter(tags=["edu-centers"])

center_manager = require_roles(UserRole.ceo.value, *ADMIN_ROLES)


async def get_center_or_404(session: AsyncSession, edu_id: int) -> EduCenter:
    center = await session.get(EduCenter, edu_id)
    if center is None:
        raise NotFoundError("EduCenter not found")
    return center


async def ensure_region(session: AsyncSession, region_id: Optional[int]) -> None:
    if region_id is not None and await session.get(Region, region_id) is None:
        raise BusinessRuleError("Region not found")


async def ensure_subjects(session: AsyncSession, fan_ids: Optional[List[int]], soha_ids: Optional[List[int]]) -> None:
    """Reject unknown subject or field ids, naming the missing ones."""
    if fan_ids:
        missing = await AsyncCrudRepository(session, Fan).missing_ids(fan_ids)
        if missing:
            raise BusinessRuleError(f"Fans not found: {', '.join(map(str, missing))}")
    if soha_ids:
        missing = await AsyncCrudRepository(session, Soha).missing_ids(soha_ids)
        if missing:
            raise BusinessRuleError(f"Sohas not found: {', '.join(map(str, missing))}")


async def _detail(repo: EduCenterRepository, center: EduCenter) -> EduCenterDetail:
    region = await repo.session.get(Region, center.region_id)
    return EduCenterDetail.model_validate(
        {
            **center.model_dump(),
            "region": RegionRead.model_validate(region) if region else None,
            "fans": [SubjectRead.model_validate(fan) for fan in await repo.list_fans(center.id)],
            "sohas": [SubjectRead.model_validate(soha) for soha in await repo.list_sohas(center.id)],
            "fillials": [FillialRead.model_validate(item) for item in await repo.list_fillials(center.id)],
            "rating": await repo.rating(center.id),
            "likes": await repo.like_count(center.id),
        }
    )


@router.get(
    "",
    response_model=Page[EduCenterRead],
    summary="List Education Centers",
    description="Filter centers by name prefix, region, subject and field.",
)
async def list_edu_centers(
    pagination: PaginationDep,
    name: Optional[str] = None,
    region_id: Optional[int] = None,
    fan_id: Optional[int] = None,
    soha_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> Page[EduCenterRead]:
    """
    List education centers.

    - **name**: case-insensitive prefix of the center name.
    - **region_id**: only centers in this region.
    - **fan_id** / **soha_id**: only centers linked to this subject / field.
    """
    rows, total = await EduCenterRepository(session).page_filtered(
        name=name,
        region_id=region_id,
        fan_id=fan_id,
        soha_id=soha_id,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[EduCenterRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[EduCenterRead.model_validate(row) for row in rows],
    )


@router.get(
    "/{edu_id}",
    response_model=EduCenterDetail,
    summary="Get Education Center",
    description="Center with region, subjects, fields, branches, average rating and like count.",
)
async def get_edu_center(edu_id: int, session: AsyncSession = Depends(get_session)) -> EduCenterDetail:
    repo = EduCenterRepository(session)
    return await _detail(repo, await get_center_or_404(session, edu_id))


@router.post(
    "",
    response_model=EduCenterDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create Education Center",
    responses={
        400: {"description": "Unknown region, subjects or fields"},
        403: {"description": "Only CEOs and admins can create centers"},
    },
)
async def create_edu_center(
    body: EduCenterCreate,
    user: TokenPayload = Depends(center_manager),
    session: AsyncSession = Depends(get_session),
) -> EduCenterDetail:
    await ensure_region(session, body.region_id)
    await ensure_subjects(session, body.fan_ids, body.soha_ids)

    repo = EduCenterRepository(session)
    center = EduCenter(**body.model_dump(exclude={"fan_ids", "soha_ids"}), user_id=user.id)
    center = await repo.create_with_links(center, body.fan_ids, body.soha_ids)
    logger.info(f"User {user.id} created education center {center.id} ({center.name})")
    return await _detail(repo, center)


@router.patch(
    "/{edu_id}",
    response_model=EduCenterDetail,
    summary="Update Education Center",
    description="Owner or admin update; ``fan_ids``/``soha_ids`` replace the linked sets.",
)
async def update_edu_center(
    edu_id: int,
    body: EduCenterUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> EduCenterDetail:
    center = await get_center_or_404(session, edu_id)
    ensure_owner_or_admin(user, center.user_id)

    data = body.model_dump(exclude_unset=True, exclude_none=True, exclude={"fan_ids", "soha_ids"})
    await ensure_region(session, data.get("region_id"))
    await ensure_subjects(session, body.fan_ids, body.soha_ids)

    repo = EduCenterRepository(session)
    center = await repo.update_with_links(center, data, fan_ids=body.fan_ids, soha_ids=body.soha_ids)
    logger.info(f"Updated education center {edu_id}")
    return await _detail(repo, center)


@router.delete(
    "/{edu_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Education Center",
    description="Deleting a center removes its links, branches, likes, comments and registrations.",
)
async def delete_edu_center(
    edu_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    center = await get_center_or_404(session, edu_id)
    ensure_owner_or_admin(user, center.user_id)
    await EduCenterRepository(session).delete(center)
    logger.info(f"Deleted education center {edu_id}")
