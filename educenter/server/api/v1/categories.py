"""
Resource category endpoints.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.categories import Category
from educenter.core.database.repositories.base import AsyncCrudRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import SortOrder
from educenter.core.models.io.catalog import CategoryCreate, CategoryRead, CategoryUpdate
from educenter.core.models.io.common import Page
from educenter.server.api.deps import AdminUser, PaginationDep, parse_sort_order
from educenter.server.core.errors import BusinessRuleError, NotFoundError

logger = get_logger(__name__)

router = APIRouter(tags=["categories"])


async def _get_category(repo: AsyncCrudRepository[Category], category_id: int) -> Category:
    category = await repo.get_by_id(category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


@router.get("", response_model=Page[CategoryRead], summary="List Categories")
async def list_categories(
    pagination: PaginationDep,
    search: Optional[str] = None,
    sort: Optional[str] = Query(default=None, description="asc or desc"),
    session: AsyncSession = Depends(get_session),
) -> Page[CategoryRead]:
    rows, total = await AsyncCrudRepository(session, Category).page(
        searches={"name": search},
        order_by="name",
        descending=parse_sort_order(sort) is SortOrder.desc,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[CategoryRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[CategoryRead.model_validate(row) for row in rows],
    )


@router.get("/{category_id}", response_model=CategoryRead, summary="Get Category")
async def get_category(category_id: int, session: AsyncSession = Depends(get_session)) -> CategoryRead:
    return CategoryRead.model_validate(await _get_category(AsyncCrudRepository(session, Category), category_id))


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Category",
    responses={400: {"description": "Category already exists"}},
)
async def create_category(
    body: CategoryCreate,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> CategoryRead:
    repo = AsyncCrudRepository(session, Category)
    if await repo.find_one(name=body.name) is not None:
        raise BusinessRuleError("Category already exists")
    category = await repo.create(Category(name=body.name, image=body.image))
    logger.info(f"Created category {category.id} ({category.name})")
    return CategoryRead.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryRead, summary="Update Category")
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> CategoryRead:
    repo = AsyncCrudRepository(session, Category)
    category = await _get_category(repo, category_id)
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in data:
        existing = await repo.find_one(name=data["name"])
        if existing is not None and existing.id != category_id:
            raise BusinessRuleError("Category already exists")
    category = await repo.update(category, data)
    logger.info(f"Updated category {category_id}")
    return CategoryRead.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Category")
async def delete_category(
    category_id: int,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = AsyncCrudRepository(session, Category)
    await repo.delete(await _get_category(repo, category_id))
    logger.info(f"Deleted category {category_id}")
