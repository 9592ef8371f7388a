"""
Router factory for subjects (fan) and fields (soha).

Both catalogs have the same shape (a name and an uploaded image), so one
factory builds their routers; ``fans`` and ``sohas`` mount the results.
"""

from typing import Literal, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.subjects import Fan, Soha
from educenter.core.database.repositories.base import AsyncCrudRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import SortOrder
from educenter.core.models.io.catalog import SubjectRead
from educenter.core.models.io.common import Page
from educenter.server.api.deps import AdminUser, PaginationDep, parse_sort_order
from educenter.server.core.errors import NotFoundError
from educenter.server.services.uploads import ImageUploadStorage, get_upload_storage

logger = get_logger(__name__)

SubjectSort = Literal["id", "name", "created_at"]
SubjectModel = TypeVar("SubjectModel", Fan, Soha)


def make_subject_router(model: Type[SubjectModel], upload_subdir: str, label: str) -> APIRouter:
    """Build list/get/create/update/delete routes for a subject-like catalog.

    Args:
        model: ``Fan`` or ``Soha``
        upload_subdir: Folder under the upload root for the images
        label: Human-readable name used in messages (e.g. ``Fan``)
    """
    router = APIRouter()
    not_found = f"{label} not found"

    async def get_entity(repo: AsyncCrudRepository, entity_id: int):
        entity = await repo.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(not_found)
        return entity

    @router.get("", response_model=Page[SubjectRead], summary=f"List {label}s")
    async def list_entities(
        pagination: PaginationDep,
        search: Optional[str] = None,
        sort: SubjectSort = Query(default="id", description="Sort column"),
        order: Optional[str] = Query(default=None, description="asc or desc"),
        session: AsyncSession = Depends(get_session),
    ) -> Page[SubjectRead]:
        rows, total = await AsyncCrudRepository(session, model).page(
            searches={"name": search},
            order_by=sort,
            descending=parse_sort_order(order) is SortOrder.desc,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        return Page[SubjectRead](
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            data=[SubjectRead.model_validate(row) for row in rows],
        )

    @router.get("/{entity_id}", response_model=SubjectRead, summary=f"Get {label}")
    async def get_one(entity_id: int, session: AsyncSession = Depends(get_session)) -> SubjectRead:
        return SubjectRead.model_validate(await get_entity(AsyncCrudRepository(session, model), entity_id))

    @router.post(
        "",
        response_model=SubjectRead,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label}",
        description=f"Multipart form with a name and an image; the image is stored under uploads/{upload_subdir}.",
    )
    async def create_entity(
        _: AdminUser,
        name: str = Form(..., min_length=3, max_length=100),
        image: UploadFile = File(...),
        session: AsyncSession = Depends(get_session),
        storage: ImageUploadStorage = Depends(get_upload_storage),
    ) -> SubjectRead:
        path = await storage.save(image, upload_subdir)
        try:
            entity = await AsyncCrudRepository(session, model).create(model(name=name, image=path))
        except Exception:
            storage.delete(path)
            raise
        logger.info(f"Created {label.lower()} {entity.id} ({entity.name})")
        return SubjectRead.model_validate(entity)

    @router.patch("/{entity_id}", response_model=SubjectRead, summary=f"Update {label}")
    async def update_entity(
        entity_id: int,
        _: AdminUser,
        name: Optional[str] = Form(default=None, min_length=3, max_length=100),
        image: Optional[UploadFile] = File(default=None),
        session: AsyncSession = Depends(get_session),
        storage: ImageUploadStorage = Depends(get_upload_storage),
    ) -> SubjectRead:
        repo = AsyncCrudRepository(session, model)
        entity = await get_entity(repo, entity_id)
        data = {}
        if name is not None:
            data["name"] = name
        old_image = None
        if image is not None and image.filename:
            old_image = entity.image
            data["image"] = await storage.save(image, upload_subdir)
        try:
            entity = await repo.update(entity, data)
        except Exception:
            if "image" in data:
                storage.delete(data["image"])
            raise
        if old_image:
            storage.delete(old_image)
        logger.info(f"Updated {label.lower()} {entity_id}")
        return SubjectRead.model_validate(entity)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT, summary=f"Delete {label}")
    async def delete_entity(
        entity_id: int,
        _: AdminUser,
        session: AsyncSession = Depends(get_session),
        storage: ImageUploadStorage = Depends(get_upload_storage),
    ) -> None:
        repo = AsyncCrudRepository(session, model)
        entity = await get_entity(repo, entity_id)
        await repo.delete(entity)
        storage.delete(entity.image)
        logger.info(f"Deleted {label.lower()} {entity_id}")

    return router
