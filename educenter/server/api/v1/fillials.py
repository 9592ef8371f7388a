"""
Branch (fillial) endpoints.

Branches are managed by the owner of their education center or by admins.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.fillials import Fillial
from educenter.core.database.repositories.fillials import FillialRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.io.catalog import SubjectRead
from educenter.core.models.io.common import Page
from educenter.core.models.io.edu_centers import FillialCreate, FillialDetail, FillialRead, FillialUpdate
from educenter.server.api.deps import CurrentUser, PaginationDep, ensure_owner_or_admin
from educenter.server.core.errors import NotFoundError

from .edu_centers import ensure_region, ensure_subjects, get_center_or_404

logger = get_logger(__name__)

router = APIRouter(tags=["fillials"])


async def get_fillial_or_404(session: AsyncSession, fillial_id: int) -> Fillial:
    fillial = await session.get(Fillial, fillial_id)
    if fillial is None:
        raise NotFoundError("Fillial not found")
    return fillial


async def _detail(repo: FillialRepository, fillial: Fillial) -> FillialDetail:
    return FillialDetail.model_validate(
        {
            **fillial.model_dump(),
            "fans": [SubjectRead.model_validate(fan) for fan in await repo.list_fans(fillial.id)],
            "sohas": [SubjectRead.model_validate(soha) for soha in await repo.list_sohas(fillial.id)],
        }
    )


@router.get("", response_model=Page[FillialRead], summary="List Branches")
async def list_fillials(
    pagination: PaginationDep,
    name: Optional[str] = None,
    edu_id: Optional[int] = None,
    region_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> Page[FillialRead]:
    rows, total = await FillialRepository(session).page_filtered(
        name=name,
        edu_id=edu_id,
        region_id=region_id,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[FillialRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[FillialRead.model_validate(row) for row in rows],
    )


@router.get("/{fillial_id}", response_model=FillialDetail, summary="Get Branch")
async def get_fillial(fillial_id: int, session: AsyncSession = Depends(get_session)) -> FillialDetail:
    return await _detail(FillialRepository(session), await get_fillial_or_404(session, fillial_id))


@router.post(
    "",
    response_model=FillialDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create Branch",
    responses={
        400: {"description": "Unknown region, subjects or fields"},
        403: {"description": "Not the center owner"},
        404: {"description": "Education center not found"},
    },
)
async def create_fillial(
    body: FillialCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> FillialDetail:
    center = await get_center_or_404(session, body.edu_id)
    ensure_owner_or_admin(user, center.user_id)
    await ensure_region(session, body.region_id)
    await ensure_subjects(session, body.fan_ids, body.soha_ids)

    repo = FillialRepository(session)
    fillial = Fillial(**body.model_dump(exclude={"fan_ids", "soha_ids"}))
    fillial = await repo.create_with_links(fillial, body.fan_ids, body.soha_ids)
    logger.info(f"Created branch {fillial.id} of education center {center.id}")
    return await _detail(repo, fillial)


@router.patch("/{fillial_id}", response_model=FillialDetail, summary="Update Branch")
async def update_fillial(
    fillial_id: int,
    body: FillialUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> FillialDetail:
    fillial = await get_fillial_or_404(session, fillial_id)
    center = await get_center_or_404(session, fillial.edu_id)
    ensure_owner_or_admin(user, center.user_id)

    data = body.model_dump(exclude_unset=True, exclude_none=True, exclude={"fan_ids", "soha_ids"})
    await ensure_region(session, data.get("region_id"))
    await ensure_subjects(session, body.fan_ids, body.soha_ids)

    repo = FillialRepository(session)
    fillial = await repo.update_with_links(fillial, data, fan_ids=body.fan_ids, soha_ids=body.soha_ids)
    logger.info(f"Updated branch {fillial_id}")
    return await _detail(repo, fillial)


@router.delete("/{fillial_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Branch")
async def delete_fillial(
    fillial_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    fillial = await get_fillial_or_404(session, fillial_id)
    center = await get_center_or_404(session, fillial.edu_id)
    ensure_owner_or_admin(user, center.user_id)
    await FillialRepository(session).delete(fillial)
    logger.info(f"Deleted branch {fillial_id}")
