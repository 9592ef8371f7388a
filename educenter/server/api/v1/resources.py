"""
Shared learning resource endpoints.

Any authenticated user can publish a resource; authors and admins can
change or remove it.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.categories import Category
from educenter.core.database.entities.resources import Resource
from educenter.core.database.repositories.resources import ResourceRepository, ResourceRow
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import SortOrder
from educenter.core.models.io.catalog import ResourceCreate, ResourceRead, ResourceUpdate
from educenter.core.models.io.common import Page
from educenter.server.api.deps import CurrentUser, PaginationDep, ensure_owner_or_admin, parse_sort_order
from educenter.server.core.errors import BusinessRuleError, NotFoundError

logger = get_logger(__name__)

router = APIRouter(tags=["resources"])


def _to_read(row: ResourceRow) -> ResourceRead:
    resource, user_full_name, category_name = row
    return ResourceRead.model_validate(
        {**resource.model_dump(), "user_full_name": user_full_name, "category_name": category_name}
    )


async def _get_row(repo: ResourceRepository, resource_id: int) -> ResourceRow:
    row = await repo.get_with_details(resource_id)
    if row is None:
        raise NotFoundError("Resource not found")
    return row


@router.get(
    "",
    response_model=Page[ResourceRead],
    summary="List Resources",
    description="Resources with author and category names, searchable by name and sorted by name.",
)
async def list_resources(
    pagination: PaginationDep,
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    sort: Optional[str] = Query(default=None, description="asc or desc"),
    session: AsyncSession = Depends(get_session),
) -> Page[ResourceRead]:
    rows, total = await ResourceRepository(session).page_with_details(
        search=search,
        category_id=category_id,
        descending=parse_sort_order(sort) is SortOrder.desc,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[ResourceRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[_to_read(row) for row in rows],
    )


@router.get("/{resource_id}", response_model=ResourceRead, summary="Get Resource")
async def get_resource(resource_id: int, session: AsyncSession = Depends(get_session)) -> ResourceRead:
    return _to_read(await _get_row(ResourceRepository(session), resource_id))


@router.post(
    "",
    response_model=ResourceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Resource",
    responses={400: {"description": "Category not found"}},
)
async def create_resource(
    body: ResourceCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ResourceRead:
    if await session.get(Category, body.category_id) is None:
        raise BusinessRuleError("Category not found")
    repo = ResourceRepository(session)
    resource = await repo.create(Resource(**body.model_dump(), user_id=user.id))
    logger.info(f"User {user.id} created resource {resource.id}")
    return _to_read(await _get_row(repo, resource.id))


@router.patch(
    "/{resource_id}",
    response_model=ResourceRead,
    summary="Update Resource",
    responses={403: {"description": "Not the author"}},
)
async def update_resource(
    resource_id: int,
    body: ResourceUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ResourceRead:
    repo = ResourceRepository(session)
    resource, _, _ = await _get_row(repo, resource_id)
    ensure_owner_or_admin(user, resource.user_id)
    await repo.update(resource, body.model_dump(exclude_none=True))
    logger.info(f"Updated resource {resource_id}")
    return _to_read(await _get_row(repo, resource_id))


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Resource")
async def delete_resource(
    resource_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = ResourceRepository(session)
    resource = await repo.get_by_id(resource_id)
    if resource is None:
        raise NotFoundError("Resource not found")
    ensure_owner_or_admin(user, resource.user_id)
    await repo.delete(resource)
    logger.info(f"Deleted resource {resource_id}")
