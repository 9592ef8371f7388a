"""
Startup creation of the super-admin account.

Self-registration cannot grant admin roles, so the first administrator is
created from ``ADMIN_EMAIL``/``ADMIN_PASSWORD`` when both are set.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database.entities.users import User
from educenter.core.database.repositories.users import UserRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import UserRole, UserStatus
from educenter.core.models.io.users import normalize_email
from educenter.server.core.config import BootstrapAdminConfig
from educenter.server.core.security import hash_password

logger = get_logger(__name__)


async def ensure_super_admin(session: AsyncSession, config: BootstrapAdminConfig) -> Optional[User]:
    """Create the configured super-admin if it does not exist yet.

    Returns:
        The newly created user, or None when nothing was created
    """
    if not config.email or not config.password:
        logger.debug("No bootstrap admin configured")
        return None

    repo = UserRepository(session)
    if await repo.get_by_email(config.email) is not None:
        logger.debug(f"Bootstrap admin {config.email} already exists")
        return None

    admin = User(
        full_name=config.full_name,
        email=normalize_email(config.email),
        password_hash=hash_password(config.password),
        phone=config.phone,
        role=UserRole.super_admin.value,
        year=1970,
        status=UserStatus.active.value,
    )
    admin = await repo.create(admin)
    logger.info(f"Created bootstrap super-admin {admin.email}")
    return admin
