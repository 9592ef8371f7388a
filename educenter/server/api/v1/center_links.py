"""
Router factory for the center-to-subject (``edu-fans``) and
center-to-field (``edu-sohas``) link endpoints.
"""

from typing import Optional, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from educenter.core.database import get_session
from educenter.core.database.repositories.links import LinkRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.io.common import Page
from educenter.server.api.deps import CurrentUser, PaginationDep, ensure_owner_or_admin
from educenter.server.core.errors import BusinessRuleError, NotFoundError

from .edu_centers import get_center_or_404

logger = get_logger(__name__)


def make_link_router(
    link_model: Type[SQLModel],
    target_model: Type[SQLModel],
    target_field: str,
    create_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
    label: str,
) -> APIRouter:
    """Build create/list/get/delete routes for one center link table.

    Args:
        link_model: ``EduFan`` or ``EduSoha``
        target_model: ``Fan`` or ``Soha``
        target_field: Link column pointing at the target (``fan_id``/``soha_id``)
        create_schema: Request body model with ``edu_id`` and the target id
        read_schema: Response model of one link
        label: Target name used in messages (``Fan``/``Soha``)
    """
    router = APIRouter()
    page_schema = Page[read_schema]

    def repo_for(session: AsyncSession) -> LinkRepository:
        return LinkRepository(session, link_model, target_field)

    async def get_link(repo: LinkRepository, link_id: int):
        link = await repo.get_by_id(link_id)
        if link is None:
            raise NotFoundError(f"Edu{label} not found")
        return link

    @router.post(
        "",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Link {label} to Education Center",
        responses={400: {"description": "Already linked"}, 404: {"description": f"Center or {label} not found"}},
    )
    async def create_link(
        body: create_schema,
        user: CurrentUser,
        session: AsyncSession = Depends(get_session),
    ):
        center = await get_center_or_404(session, body.edu_id)
        target_id = getattr(body, target_field)
        if await session.get(target_model, target_id) is None:
            raise NotFoundError(f"{label} not found")
        ensure_owner_or_admin(user, center.user_id)

        repo = repo_for(session)
        if await repo.get_pair(body.edu_id, target_id) is not None:
            raise BusinessRuleError(f"{label} is already linked to this education center")
        link = await repo.create(link_model(edu_id=body.edu_id, **{target_field: target_id}))
        logger.info(f"Linked {label.lower()} {target_id} to education center {body.edu_id}")
        return read_schema.model_validate(link)

    @router.get("", response_model=page_schema, summary=f"List Edu{label} Links")
    async def list_links(
        pagination: PaginationDep,
        edu_id: Optional[int] = None,
        session: AsyncSession = Depends(get_session),
    ):
        rows, total = await repo_for(session).page(
            filters={"edu_id": edu_id},
            limit=pagination.limit,
            offset=pagination.offset,
        )
        return page_schema(
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            data=[read_schema.model_validate(row) for row in rows],
        )

    @router.get("/{link_id}", response_model=read_schema, summary=f"Get Edu{label} Link")
    async def get_one(link_id: int, session: AsyncSession = Depends(get_session)):
        return read_schema.model_validate(await get_link(repo_for(session), link_id))

    @router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT, summary=f"Delete Edu{label} Link")
    async def delete_link(
        link_id: int,
        user: CurrentUser,
        session: AsyncSession = Depends(get_session),
    ) -> None:
        repo = repo_for(session)
        link = await get_link(repo, link_id)
        center = await get_center_or_404(session, link.edu_id)
        ensure_owner_or_admin(user, center.user_id)
        await repo.delete(link)
        logger.info(f"Unlinked edu{label.lower()} {link_id}")

    return router
