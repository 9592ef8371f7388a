"""Test configuration for database unit tests.

This module provides common fixtures for testing the database layer with
in-memory SQLite.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.pool import StaticPool

from educenter.core.database import create_all, create_engine, create_sessionmaker
from educenter.core.database.entities import Fan, Region, Soha, User


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture(scope="function")
async def sample_region(in_memory_session: AsyncSession) -> Region:
    region = Region(name="Samarkand")
    in_memory_session.add(region)
    await in_memory_session.commit()
    return region


@pytest.fixture(scope="function")
async def sample_owner(in_memory_session: AsyncSession, sample_region: Region) -> User:
    user = User(
        full_name="Owner",
        email="owner@example.com",
        password_hash="hash",
        phone="+998901110000",
        role="CEO",
        year=1985,
        status="active",
        region_id=sample_region.id,
    )
    in_memory_session.add(user)
    await in_memory_session.commit()
    return user


@pytest.fixture(scope="function")
async def sample_subjects(in_memory_session: AsyncSession) -> tuple[list[Fan], list[Soha]]:
    """Three subjects and two fields."""
    fans = [Fan(name=name, image=f"/uploads/fan/{i}.png") for i, name in enumerate(["Math", "Physics", "Art"])]
    sohas = [Soha(name=name, image=f"/uploads/soha/{i}.png") for i, name in enumerate(["Exact", "Creative"])]
    in_memory_session.add_all([*fans, *sohas])
    await in_memory_session.commit()
    return fans, sohas
