"""
Fixtures for API tests.

Each test gets a fresh in-memory SQLite database. Requests run with their
own sessions from the test engine; the ``session`` fixture is used to
arrange data and to inspect the database afterwards.
"""

from __future__ import annotations

import itertools
from typing import AsyncGenerator, Awaitable, Callable, Dict, List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.pool import StaticPool

from educenter.core.database import create_all, create_engine, create_sessionmaker
from educenter.core.database.entities import Fan, Region, Soha, User
from educenter.core.models.domain.enums import UserRole, UserStatus
from educenter.server.core.config import SMTPConfig
from educenter.server.core.security import create_access_token, hash_password
from educenter.server.services.mailer import Mailer
from educenter.server.services.uploads import ImageUploadStorage

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "secret123"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class RecordingMailer(Mailer):
    """Mailer that keeps messages in memory instead of sending them."""

    def __init__(self) -> None:
        super().__init__(SMTPConfig(enabled=False))
        self.sent: List[Tuple[str, str, str]] = []

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        self.sent.append((recipient, subject, body))
        return True


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database with all tables."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine):
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def storage(tmp_path) -> ImageUploadStorage:
    return ImageUploadStorage(tmp_path / "uploads", 2 * 1024 * 1024, [".jpeg", ".jpg", ".png"])


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_maker, mailer, storage) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app with test dependencies."""
    from educenter.core.database import get_session
    from educenter.server.main import app
    from educenter.server.services.mailer import get_mailer
    from educenter.server.services.uploads import get_upload_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as request_session:
            yield request_session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_upload_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def region(session: AsyncSession) -> Region:
    region = Region(name="Tashkent")
    session.add(region)
    await session.commit()
    await session.refresh(region)
    return region


@pytest_asyncio.fixture
async def create_user(session: AsyncSession, region: Region) -> Callable[..., Awaitable[User]]:
    """Factory creating verified users with unique e-mail and phone."""
    counter = itertools.count(1)

    async def _create(
        role: str = UserRole.user.value,
        status: str = UserStatus.active.value,
        password: str = DEFAULT_PASSWORD,
        email: str | None = None,
        full_name: str | None = None,
    ) -> User:
        n = next(counter)
        user = User(
            full_name=full_name or f"User {n}",
            email=email or f"user{n}@example.com",
            password_hash=hash_password(password),
            phone=f"+99890000{n:04d}",
            role=role,
            year=1990,
            status=status,
            region_id=region.id,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _create


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest_asyncio.fixture
async def admin(create_user) -> User:
    return await create_user(role=UserRole.admin.value, full_name="Admin")


@pytest_asyncio.fixture
async def member(create_user) -> User:
    return await create_user(role=UserRole.user.value, full_name="Member")


@pytest_asyncio.fixture
async def ceo(create_user) -> User:
    return await create_user(role=UserRole.ceo.value, full_name="Center Owner")


@pytest.fixture
def admin_headers(admin: User) -> Dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def member_headers(member: User) -> Dict[str, str]:
    return auth_headers(member)


@pytest.fixture
def ceo_headers(ceo: User) -> Dict[str, str]:
    return auth_headers(ceo)


@pytest_asyncio.fixture
async def fan(session: AsyncSession) -> Fan:
    fan = Fan(name="Mathematics", image="/uploads/fan/math.png")
    session.add(fan)
    await session.commit()
    await session.refresh(fan)
    return fan


@pytest_asyncio.fixture
async def soha(session: AsyncSession) -> Soha:
    soha = Soha(name="Exact sciences", image="/uploads/soha/exact.png")
    session.add(soha)
    await session.commit()
    await session.refresh(soha)
    return soha


@pytest_asyncio.fixture
async def edu_center(client: AsyncClient, ceo_headers, region: Region, fan: Fan, soha: Soha) -> dict:
    """Education center owned by ``ceo``, created through the API."""
    payload = {
        "name": "Bright Future",
        "image": "/uploads/center.png",
        "phone": "+998901112233",
        "license": "LIC-001",
        "address": "Amir Temur 1",
        "region_id": region.id,
        "fan_ids": [fan.id],
        "soha_ids": [soha.id],
    }
    response = await client.post("/api/v1/edu-centers", json=payload, headers=ceo_headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def fillial(client: AsyncClient, ceo_headers, edu_center: dict, region: Region, fan: Fan, soha: Soha) -> dict:
    payload = {
        "name": "Chilonzor branch",
        "phone": "+998901112244",
        "location": "Chilonzor 5",
        "image": "/uploads/branch.png",
        "region_id": region.id,
        "edu_id": edu_center["id"],
        "fan_ids": [fan.id],
        "soha_ids": [soha.id],
    }
    response = await client.post("/api/v1/fillials", json=payload, headers=ceo_headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def headers_for() -> Callable[[User], Dict[str, str]]:
    """Build bearer headers for any user."""
    return auth_headers


@pytest.fixture
def png_file() -> Tuple[str, bytes, str]:
    """Multipart tuple of a small PNG image."""
    return ("picture.png", PNG_BYTES, "image/png")
