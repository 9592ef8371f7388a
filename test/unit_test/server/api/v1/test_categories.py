"""
Unit tests for resource category endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def make_category(client: AsyncClient, headers, name: str = "Books") -> dict:
    response = await client.post(
        "/api/v1/categories", json={"name": name, "image": "/uploads/books.png"}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCategories:
    async def test_create_and_list(self, client: AsyncClient, admin_headers):
        await make_category(client, admin_headers, "Videos")
        await make_category(client, admin_headers, "Books")

        response = await client.get("/api/v1/categories")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [c["name"] for c in data["data"]] == ["Books", "Videos"]

    async def test_create_requires_admin(self, client: AsyncClient, ceo_headers):
        response = await client.post(
            "/api/v1/categories", json={"name": "Books", "image": "/uploads/b.png"}, headers=ceo_headers
        )
        assert response.status_code == 403

    async def test_create_missing_image(self, client: AsyncClient, admin_headers):
        response = await client.post("/api/v1/categories", json={"name": "Books"}, headers=admin_headers)
        assert response.status_code == 400
        assert "image" in response.json()["detail"]

    async def test_duplicate_name(self, client: AsyncClient, admin_headers):
        await make_category(client, admin_headers)
        response = await client.post(
            "/api/v1/categories", json={"name": "Books", "image": "/uploads/x.png"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Category already exists"

    async def test_update_and_delete(self, client: AsyncClient, admin_headers):
        category = await make_category(client, admin_headers)

        response = await client.patch(
            f"/api/v1/categories/{category['id']}", json={"image": "/uploads/new.png"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["image"] == "/uploads/new.png"
        assert response.json()["name"] == "Books"

        response = await client.delete(f"/api/v1/categories/{category['id']}", headers=admin_headers)
        assert response.status_code == 204
        assert (await client.get(f"/api/v1/categories/{category['id']}")).status_code == 404

    async def test_update_to_taken_name(self, client: AsyncClient, admin_headers):
        await make_category(client, admin_headers, "Books")
        videos = await make_category(client, admin_headers, "Videos")
        response = await client.patch(
            f"/api/v1/categories/{videos['id']}", json={"name": "Books"}, headers=admin_headers
        )
        assert response.status_code == 400
