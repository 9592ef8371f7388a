import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestUploadImage:
    async def test_upload_png(self, client: AsyncClient, member_headers, storage, png_file):
        response = await client.post("/api/v1/upload", files={"file": png_file}, headers=member_headers)
        assert response.status_code == 201
        url = response.json()["url"]
        assert url.startswith("/uploads/")
        assert (storage.directory / url[len("/uploads/"):]).read_bytes() == png_file[1]

    async def test_upload_requires_token(self, client: AsyncClient, png_file):
        response = await client.post("/api/v1/upload", files={"file": png_file})
        assert response.status_code == 401

    async def test_upload_rejects_mismatched_content_type(self, client: AsyncClient, member_headers):
        response = await client.post(
            "/api/v1/upload", files={"file": ("photo.png", b"GIF89a", "image/gif")}, headers=member_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Only images are allowed!"

    async def test_upload_rejects_large_file(self, client: AsyncClient, member_headers):
        big = b"\x00" * (2 * 1024 * 1024 + 1)
        response = await client.post(
            "/api/v1/upload", files={"file": ("big.jpg", big, "image/jpeg")}, headers=member_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "File is too large"

    async def test_upload_missing_file(self, client: AsyncClient, member_headers):
        response = await client.post("/api/v1/upload", headers=member_headers)
        assert response.status_code == 400
