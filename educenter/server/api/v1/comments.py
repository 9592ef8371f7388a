"""
Comment and rating endpoints.

A center's rating is the average star value of its comments.
"""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.engagement import Comment
from educenter.core.database.repositories.engagement import CommentRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import SortOrder
from educenter.core.models.io.common import Page
from educenter.core.models.io.engagement import CommentCreate, CommentRead, CommentUpdate
from educenter.server.api.deps import (
    PERMISSION_DENIED,
    CurrentUser,
    PaginationDep,
    ensure_owner_or_admin,
    parse_sort_order,
)
from educenter.server.core.errors import NotFoundError, PermissionDeniedError

from .edu_centers import get_center_or_404

logger = get_logger(__name__)

router = APIRouter(tags=["comments"])


async def _get_comment(repo: CommentRepository, comment_id: int) -> Comment:
    comment = await repo.get_by_id(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


@router.post("", response_model=CommentRead, status_code=status.HTTP_201_CREATED, summary="Create Comment")
async def create_comment(
    body: CommentCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> CommentRead:
    await get_center_or_404(session, body.edu_id)
    comment = await CommentRepository(session).create(Comment(**body.model_dump(), user_id=user.id))
    logger.info(f"User {user.id} commented on education center {body.edu_id}")
    return CommentRead.model_validate(comment)


@router.get("", response_model=Page[CommentRead], summary="List Comments")
async def list_comments(
    pagination: PaginationDep,
    edu_id: Optional[int] = None,
    search: Optional[str] = None,
    sort: Literal["id", "star", "created_at"] = Query(default="id", description="Sort column"),
    order: Optional[str] = Query(default=None, description="asc or desc"),
    session: AsyncSession = Depends(get_session),
) -> Page[CommentRead]:
    rows, total = await CommentRepository(session).page(
        filters={"edu_id": edu_id},
        searches={"comment": search},
        order_by=sort,
        descending=parse_sort_order(order) is SortOrder.desc,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[CommentRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[CommentRead.model_validate(row) for row in rows],
    )


@router.get("/{comment_id}", response_model=CommentRead, summary="Get Comment")
async def get_comment(comment_id: int, session: AsyncSession = Depends(get_session)) -> CommentRead:
    return CommentRead.model_validate(await _get_comment(CommentRepository(session), comment_id))


@router.patch(
    "/{comment_id}",
    response_model=CommentRead,
    summary="Update Comment",
    responses={403: {"description": "Only the author can edit a comment"}},
)
async def update_comment(
    comment_id: int,
    body: CommentUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> CommentRead:
    repo = CommentRepository(session)
    comment = await _get_comment(repo, comment_id)
    if comment.user_id != user.id:
        raise PermissionDeniedError(PERMISSION_DENIED)
    comment = await repo.update(comment, body.model_dump(exclude_unset=True, exclude_none=True))
    logger.info(f"Updated comment {comment_id}")
    return CommentRead.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Comment")
async def delete_comment(
    comment_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = CommentRepository(session)
    comment = await _get_comment(repo, comment_id)
    ensure_owner_or_admin(user, comment.user_id)
    await repo.delete(comment)
    logger.info(f"Deleted comment {comment_id}")
