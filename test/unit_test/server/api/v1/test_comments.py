"""
Unit tests for comment and rating endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def post_comment(client: AsyncClient, headers, edu_id: int, star: int = 4, text: str = "Nice place") -> dict:
    response = await client.post(
        "/api/v1/comments", json={"edu_id": edu_id, "star": star, "comment": text}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateComment:
    async def test_create(self, client: AsyncClient, member, member_headers, edu_center):
        comment = await post_comment(client, member_headers, edu_center["id"])
        assert comment["user_id"] == member.id
        assert comment["star"] == 4

    @pytest.mark.parametrize("star", [-1, 6])
    async def test_star_out_of_range(self, client: AsyncClient, member_headers, edu_center, star):
        response = await client.post(
            "/api/v1/comments", json={"edu_id": edu_center["id"], "star": star, "comment": "Hmm"}, headers=member_headers
        )
        assert response.status_code == 400
        assert "star" in response.json()["detail"]

    async def test_comment_too_long(self, client: AsyncClient, member_headers, edu_center):
        response = await client.post(
            "/api/v1/comments",
            json={"edu_id": edu_center["id"], "star": 3, "comment": "x" * 251},
            headers=member_headers,
        )
        assert response.status_code == 400

    async def test_unknown_center(self, client: AsyncClient, member_headers):
        response = await client.post(
            "/api/v1/comments", json={"edu_id": 999, "star": 3, "comment": "Who?"}, headers=member_headers
        )
        assert response.status_code == 404


class TestListComments:
    async def test_sort_by_star(self, client: AsyncClient, member_headers, edu_center):
        for star in (3, 5, 1):
            await post_comment(client, member_headers, edu_center["id"], star=star)

        response = await client.get("/api/v1/comments", params={"edu_id": edu_center["id"], "sort": "star"})
        assert [c["star"] for c in response.json()["data"]] == [1, 3, 5]

        response = await client.get(
            "/api/v1/comments", params={"edu_id": edu_center["id"], "sort": "star", "order": "desc"}
        )
        assert [c["star"] for c in response.json()["data"]] == [5, 3, 1]

    async def test_search(self, client: AsyncClient, member_headers, edu_center):
        await post_comment(client, member_headers, edu_center["id"], text="Friendly staff")
        await post_comment(client, member_headers, edu_center["id"], text="Cold rooms")

        response = await client.get("/api/v1/comments", params={"search": "STAFF"})
        assert [c["comment"] for c in response.json()["data"]] == ["Friendly staff"]


class TestChangeComment:
    async def test_author_edits(self, client: AsyncClient, member_headers, edu_center):
        comment = await post_comment(client, member_headers, edu_center["id"])

        response = await client.patch(f"/api/v1/comments/{comment['id']}", json={"star": 1}, headers=member_headers)
        assert response.status_code == 200
        assert response.json()["star"] == 1
        assert response.json()["comment"] == "Nice place"

    async def test_admin_cannot_edit_but_can_delete(self, client: AsyncClient, member_headers, admin_headers, edu_center):
        comment = await post_comment(client, member_headers, edu_center["id"])

        response = await client.patch(f"/api/v1/comments/{comment['id']}", json={"star": 0}, headers=admin_headers)
        assert response.status_code == 403

        response = await client.delete(f"/api/v1/comments/{comment['id']}", headers=admin_headers)
        assert response.status_code == 204
        assert (await client.get(f"/api/v1/comments/{comment['id']}")).status_code == 404

    async def test_stranger_cannot_delete(self, client: AsyncClient, member_headers, ceo_headers, edu_center):
        comment = await post_comment(client, member_headers, edu_center["id"])
        response = await client.delete(f"/api/v1/comments/{comment['id']}", headers=ceo_headers)
        assert response.status_code == 403
