"""
Course registration endpoints.

A registration ties the caller to a subject and field at one branch of a
center. Admins see every registration; other users only their own.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.edu_centers import EduCenter
from educenter.core.database.entities.engagement import CourseRegister
from educenter.core.database.entities.fillials import Fillial
from educenter.core.database.entities.subjects import Fan, Soha
from educenter.core.database.repositories.engagement import CourseRegisterRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.io.common import Page
from educenter.core.models.io.engagement import CourseRegisterCreate, CourseRegisterRead, CourseRegisterUpdate
from educenter.server.api.deps import (
    PERMISSION_DENIED,
    CurrentUser,
    PaginationDep,
    ensure_owner_or_admin,
    is_admin,
)
from educenter.server.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError

logger = get_logger(__name__)

router = APIRouter(tags=["course-registers"])


async def _check_references(session: AsyncSession, edu_id: int, soha_id: int, fan_id: int, fillial_id: int) -> None:
    """Every referenced record must exist and the branch must belong to the center."""
    if await session.get(EduCenter, edu_id) is None:
        raise NotFoundError("EduCenter not found")
    if await session.get(Soha, soha_id) is None:
        raise NotFoundError("Soha not found")
    if await session.get(Fan, fan_id) is None:
        raise NotFoundError("Fan not found")
    fillial = await session.get(Fillial, fillial_id)
    if fillial is None:
        raise NotFoundError("Fillial not found")
    if fillial.edu_id != edu_id:
        raise BusinessRuleError("Fillial does not belong to this education center")


async def _get_registration(repo: CourseRegisterRepository, register_id: int) -> CourseRegister:
    registration = await repo.get_by_id(register_id)
    if registration is None:
        raise NotFoundError("Course registration not found")
    return registration


@router.post(
    "",
    response_model=CourseRegisterRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register for a Course",
    responses={
        400: {"description": "Branch belongs to another center"},
        404: {"description": "Referenced center, subject, field or branch not found"},
    },
)
async def create_course_register(
    body: CourseRegisterCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> CourseRegisterRead:
    await _check_references(session, body.edu_id, body.soha_id, body.fan_id, body.fillial_id)
    registration = await CourseRegisterRepository(session).create(CourseRegister(**body.model_dump(), user_id=user.id))
    logger.info(f"User {user.id} registered for course at branch {body.fillial_id}")
    return CourseRegisterRead.model_validate(registration)


@router.get(
    "",
    response_model=Page[CourseRegisterRead],
    summary="List Course Registrations",
    description="Admins may filter by user and center; other users only see their own registrations.",
)
async def list_course_registers(
    user: CurrentUser,
    pagination: PaginationDep,
    user_id: Optional[int] = None,
    edu_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> Page[CourseRegisterRead]:
    owner = user_id if is_admin(user) else user.id
    rows, total = await CourseRegisterRepository(session).page(
        filters={"user_id": owner, "edu_id": edu_id},
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return Page[CourseRegisterRead](
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        data=[CourseRegisterRead.model_validate(row) for row in rows],
    )


@router.get("/{register_id}", response_model=CourseRegisterRead, summary="Get Course Registration")
async def get_course_register(
    register_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> CourseRegisterRead:
    """Visible to the registrant, the owner of the center and admins."""
    registration = await _get_registration(CourseRegisterRepository(session), register_id)
    if registration.user_id != user.id and not is_admin(user):
        center = await session.get(EduCenter, registration.edu_id)
        if center is None or center.user_id != user.id:
            raise PermissionDeniedError(PERMISSION_DENIED)
    return CourseRegisterRead.model_validate(registration)


@router.patch("/{register_id}", response_model=CourseRegisterRead, summary="Update Course Registration")
async def update_course_register(
    register_id: int,
    body: CourseRegisterUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> CourseRegisterRead:
    repo = CourseRegisterRepository(session)
    registration = await _get_registration(repo, register_id)
    ensure_owner_or_admin(user, registration.user_id)

    data = body.model_dump(exclude_unset=True, exclude_none=True)
    merged = {
        "edu_id": registration.edu_id,
        "soha_id": registration.soha_id,
        "fan_id": registration.fan_id,
        "fillial_id": registration.fillial_id,
        **data,
    }
    await _check_references(session, **merged)
    registration = await repo.update(registration, data)
    logger.info(f"Updated course registration {register_id}")
    return CourseRegisterRead.model_validate(registration)


@router.delete("/{register_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Course Registration")
async def delete_course_register(
    register_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = CourseRegisterRepository(session)
    registration = await _get_registration(repo, register_id)
    ensure_owner_or_admin(user, registration.user_id)
    await repo.delete(registration)
    logger.info(f"Deleted course registration {register_id}")
