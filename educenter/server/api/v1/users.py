"""
User management endpoints.

Admins list and inspect accounts; any user may edit or delete their own
account, and only admins may change roles.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.regions import Region
from educenter.core.database.entities.users import User
from educenter.core.database.repositories.users import UserRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import SortOrder
from educenter.core.models.io.common import Page
from educenter.core.models.io.users import UserRead, UserUpdate
from educenter.server.api.deps import (
    PERMISSION_DENIED,
    AdminUser,
    CurrentUser,
    PaginationDep,
    ensure_owner_or_admin,
    is_admin,
    parse_sort_order,
)
from educenter.server.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


async def _get_user(repo: UserRepository, user_id: int) -> User:
    user = await repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get(
    "",
    response_model=Page[UserRead],
    summary="List Users",
    description="Admin-only list of accounts with substring filters, sorted by full name.",
)
async def list_users(
    _: AdminUser,
    pagination: PaginationDep,
    name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    role: Optional[str] = None,
    status_: Optional[str] = Query(default=None, alias="status"),
    sort: Optional[str] = Query(default=None, description="asc or desc"),
    session: AsyncSession = Depends(get_session),
) -> Page[UserRead]:
    """
    List users.

    - **name**, **email**, **phone**, **role**, **status**: case-insensitive substring filters.
    - **sort**: ``asc`` (default) or ``desc`` by full name.
    """
    rows, total = await UserRepository(session).page(
        searches={"full_name": name, "email": email, "phone": phone, "role": role, "status": status_},
        order_by="full_name",
        descending=parse_sort_order(sort) is SortOrder.desc,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[UserRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[UserRead.model_validate(row) for row in rows],
    )


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: int,
    _: AdminUser,
    session: AsyncSession = Depends(get_session),
) -> UserRead:
    return UserRead.model_validate(await _get_user(UserRepository(session), user_id))


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Update name, phone, region or (admins only) role of an account.",
    responses={
        400: {"description": "Duplicate phone or unknown region"},
        403: {"description": "Not the account owner or role change without admin rights"},
    },
)
async def update_user(
    user_id: int,
    body: UserUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> UserRead:
    ensure_owner_or_admin(user, user_id)
    data = body.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    if "role" in data and not is_admin(user):
        raise PermissionDeniedError(PERMISSION_DENIED)

    repo = UserRepository(session)
    account = await _get_user(repo, user_id)

    if data.get("phone") and data["phone"] != account.phone:
        if await repo.get_by_phone(data["phone"]) is not None:
            raise BusinessRuleError("User with this phone number already exists")
    if data.get("region_id") is not None and await session.get(Region, data["region_id"]) is None:
        raise BusinessRuleError("Region not found")

    account = await repo.update(account, data)
    logger.info(f"Updated user {user_id} fields={sorted(data)}")
    return UserRead.model_validate(account)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete User",
    responses={403: {"description": "Not the account owner"}, 404: {"description": "User not found"}},
)
async def delete_user(
    user_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    ensure_owner_or_admin(user, user_id)
    repo = UserRepository(session)
    account = await _get_user(repo, user_id)
    await repo.delete(account)
    logger.info(f"Deleted user {user_id}")
