"""
Like endpoints. A user can like each education center once.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.engagement import Liked
from educenter.core.database.repositories.engagement import LikedRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.io.common import Page
from educenter.core.models.io.engagement import LikeCreate, LikeRead
from educenter.server.api.deps import CurrentUser, PaginationDep, ensure_owner_or_admin
from educenter.server.core.errors import BusinessRuleError, NotFoundError

from .edu_centers import get_center_or_404

logger = get_logger(__name__)

router = APIRouter(tags=["likes"])


async def _get_like(repo: LikedRepository, like_id: int) -> Liked:
    like = await repo.get_by_id(like_id)
    if like is None:
        raise NotFoundError("Like not found")
    return like


@router.post(
    "",
    response_model=LikeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Like Education Center",
    responses={400: {"description": "Already liked"}, 404: {"description": "Education center not found"}},
)
async def create_like(
    body: LikeCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> LikeRead:
    await get_center_or_404(session, body.edu_id)
    repo = LikedRepository(session)
    if await repo.get_pair(user.id, body.edu_id) is not None:
        raise BusinessRuleError("Already liked")
    like = await repo.create(Liked(user_id=user.id, edu_id=body.edu_id))
    logger.info(f"User {user.id} liked education center {body.edu_id}")
    return LikeRead.model_validate(like)


@router.get("", response_model=Page[LikeRead], summary="List Likes")
async def list_likes(
    pagination: PaginationDep,
    user_id: Optional[int] = None,
    edu_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> Page[LikeRead]:
    rows, total = await LikedRepository(session).page(
        filters={"user_id": user_id, "edu_id": edu_id},
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[LikeRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[LikeRead.model_validate(row) for row in rows],
    )


@router.get("/{like_id}", response_model=LikeRead, summary="Get Like")
async def get_like(like_id: int, session: AsyncSession = Depends(get_session)) -> LikeRead:
    return LikeRead.model_validate(await _get_like(LikedRepository(session), like_id))


@router.delete("/{like_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove Like")
async def delete_like(
    like_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = LikedRepository(session)
    like = await _get_like(repo, like_id)
    ensure_owner_or_admin(user, like.user_id)
    await repo.delete(like)
    logger.info(f"Removed like {like_id}")
