"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request timing), registers exception handlers, mounts the uploaded
files and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from educenter.core.database import async_session_maker, init_db
from educenter.core.logging_config import get_logger, setup_logging
from educenter.core.monitoring import initialize_logfire

from .api.v1 import (
    auth,
    categories,
    comments,
    course_registers,
    edu_centers,
    edu_fans,
    edu_sohas,
    fans,
    fillials,
    health,
    likes,
    regions,
    resources,
    sohas,
    uploads,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTimingMiddleware
from .services.bootstrap import ensure_super_admin
from .services.uploads import get_upload_storage

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup: create tables (when enabled) and the bootstrap super-admin.
    """
    logger.info("Starting up EduCenter API Server...")
    try:
        await init_db()
        async with async_session_maker() as session:
            await ensure_super_admin(session, settings.bootstrap_admin)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down EduCenter API Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    EduCenter Directory API

    Backend for a directory of education centers: accounts with e-mail OTP
    verification, regions, categories and resources, subjects and fields,
    centers and their branches, course registrations, comments and likes.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestTimingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

upload_storage = get_upload_storage()
upload_storage.ensure_directory()
app.mount(constant.UPLOADS_URL_PREFIX, StaticFiles(directory=upload_storage.directory), name="uploads")

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(regions.router, prefix=f"{constant.API_V1_STR}/regions")
app.include_router(categories.router, prefix=f"{constant.API_V1_STR}/categories")
app.include_router(resources.router, prefix=f"{constant.API_V1_STR}/resources")
app.include_router(fans.router, prefix=f"{constant.API_V1_STR}/fans", tags=["fans"])
app.include_router(sohas.router, prefix=f"{constant.API_V1_STR}/sohas", tags=["sohas"])
app.include_router(edu_centers.router, prefix=f"{constant.API_V1_STR}/edu-centers")
app.include_router(edu_fans.router, prefix=f"{constant.API_V1_STR}/edu-fans", tags=["edu-fans"])
app.include_router(edu_sohas.router, prefix=f"{constant.API_V1_STR}/edu-sohas", tags=["edu-sohas"])
app.include_router(fillials.router, prefix=f"{constant.API_V1_STR}/fillials")
app.include_router(course_registers.router, prefix=f"{constant.API_V1_STR}/course-registers")
app.include_router(comments.router, prefix=f"{constant.API_V1_STR}/comments")
app.include_router(likes.router, prefix=f"{constant.API_V1_STR}/likes")
app.include_router(uploads.router, prefix=f"{constant.API_V1_STR}/upload")
