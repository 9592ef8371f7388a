"""
Unit tests for the edu-fans and edu-sohas link endpoints.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from educenter.core.database.entities import Fan, Soha

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def extra_fan(session) -> Fan:
    fan = Fan(name="Chemistry", image="/uploads/fan/chem.png")
    session.add(fan)
    await session.commit()
    await session.refresh(fan)
    return fan


@pytest_asyncio.fixture
async def extra_soha(session) -> Soha:
    soha = Soha(name="Natural sciences", image="/uploads/soha/nature.png")
    session.add(soha)
    await session.commit()
    await session.refresh(soha)
    return soha


class TestEduFans:
    async def test_link_and_list(self, client: AsyncClient, edu_center, extra_fan, ceo_headers):
        response = await client.post(
            "/api/v1/edu-fans", json={"edu_id": edu_center["id"], "fan_id": extra_fan.id}, headers=ceo_headers
        )
        assert response.status_code == 201
        link = response.json()
        assert link["fan_id"] == extra_fan.id

        response = await client.get("/api/v1/edu-fans", params={"edu_id": edu_center["id"]})
        assert response.json()["total"] == 2

        response = await client.get(f"/api/v1/edu-fans/{link['id']}")
        assert response.status_code == 200

        detail = (await client.get(f"/api/v1/edu-centers/{edu_center['id']}")).json()
        assert {f["id"] for f in detail["fans"]} == {edu_center["fans"][0]["id"], extra_fan.id}

    async def test_duplicate_link(self, client: AsyncClient, edu_center, fan, ceo_headers):
        response = await client.post(
            "/api/v1/edu-fans", json={"edu_id": edu_center["id"], "fan_id": fan.id}, headers=ceo_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Fan is already linked to this education center"

    async def test_unknown_center_and_fan(self, client: AsyncClient, edu_center, fan, ceo_headers):
        response = await client.post("/api/v1/edu-fans", json={"edu_id": 999, "fan_id": fan.id}, headers=ceo_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "EduCenter not found"

        response = await client.post(
            "/api/v1/edu-fans", json={"edu_id": edu_center["id"], "fan_id": 999}, headers=ceo_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Fan not found"

    async def test_non_owner_forbidden(self, client: AsyncClient, edu_center, extra_fan, member_headers):
        response = await client.post(
            "/api/v1/edu-fans", json={"edu_id": edu_center["id"], "fan_id": extra_fan.id}, headers=member_headers
        )
        assert response.status_code == 403

    async def test_unlink(self, client: AsyncClient, edu_center, ceo_headers, member_headers):
        link_id = (await client.get("/api/v1/edu-fans", params={"edu_id": edu_center["id"]})).json()["data"][0]["id"]

        response = await client.delete(f"/api/v1/edu-fans/{link_id}", headers=member_headers)
        assert response.status_code == 403

        response = await client.delete(f"/api/v1/edu-fans/{link_id}", headers=ceo_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/v1/edu-fans/{link_id}")
        assert response.status_code == 404
        assert response.json()["detail"] == "EduFan not found"


class TestEduSohas:
    async def test_link_and_unlink(self, client: AsyncClient, edu_center, extra_soha, admin_headers):
        response = await client.post(
            "/api/v1/edu-sohas", json={"edu_id": edu_center["id"], "soha_id": extra_soha.id}, headers=admin_headers
        )
        assert response.status_code == 201
        link_id = response.json()["id"]

        response = await client.delete(f"/api/v1/edu-sohas/{link_id}", headers=admin_headers)
        assert response.status_code == 204

        response = await client.get("/api/v1/edu-sohas", params={"edu_id": edu_center["id"]})
        assert [row["soha_id"] for row in response.json()["data"]] == [edu_center["sohas"][0]["id"]]

    async def test_unknown_soha(self, client: AsyncClient, edu_center, ceo_headers):
        response = await client.post(
            "/api/v1/edu-sohas", json={"edu_id": edu_center["id"], "soha_id": 999}, headers=ceo_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Soha not found"
