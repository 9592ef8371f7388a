"""
Unit tests for authentication endpoints.

Tests cover:
- Registration rules and duplicate detection
- OTP sending and verification
- Login with device session tracking
- Current user, sessions, password change and token refresh
"""

import pytest
from httpx import AsyncClient
from sqlmodel import select

from educenter.core.database.entities import DeviceSession, User
from educenter.server.core.security import create_refresh_token, decode_access_token, verify_password
from educenter.server.services.otp import generate_otp

pytestmark = pytest.mark.asyncio


def registration_payload(region_id: int, **overrides) -> dict:
    payload = {
        "full_name": "Ali Valiyev",
        "email": "ali@example.com",
        "password": "secret123",
        "phone": "+998901234567",
        "role": "user",
        "region_id": region_id,
        "year": 1995,
    }
    payload.update(overrides)
    return payload


async def register_and_verify(client: AsyncClient, region_id: int, **overrides) -> dict:
    payload = registration_payload(region_id, **overrides)
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    response = await client.post(
        "/api/v1/auth/verify", json={"email": payload["email"], "otp": generate_otp(payload["email"])}
    )
    assert response.status_code == 200, response.text
    return payload


async def login(client: AsyncClient, email: str, password: str) -> dict:
    response = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


class TestRegister:
    """Test account registration."""

    async def test_register_success(self, client: AsyncClient, region, mailer, session):
        response = await client.post("/api/v1/auth/register", json=registration_payload(region.id))

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created, OTP sent to ali@example.com!"
        assert data["user"]["status"] == "pending"
        assert data["user"]["role"] == "user"
        assert "password" not in data["user"]
        assert "password_hash" not in data["user"]

        assert len(mailer.sent) == 1
        recipient, subject, body = mailer.sent[0]
        assert recipient == "ali@example.com"
        assert generate_otp("ali@example.com") in body

        user = (await session.execute(select(User).where(User.email == "ali@example.com"))).scalar_one()
        assert user.password_hash != "secret123"
        assert verify_password("secret123", user.password_hash)

    async def test_register_ceo(self, client: AsyncClient, region):
        response = await client.post("/api/v1/auth/register", json=registration_payload(region.id, role="CEO"))
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "CEO"

    async def test_register_admin_role_rejected(self, client: AsyncClient, region):
        response = await client.post("/api/v1/auth/register", json=registration_payload(region.id, role="admin"))
        assert response.status_code == 400
        assert "role" in response.json()["detail"]

    async def test_register_duplicate_email(self, client: AsyncClient, region):
        await client.post("/api/v1/auth/register", json=registration_payload(region.id))
        response = await client.post(
            "/api/v1/auth/register", json=registration_payload(region.id, phone="+998907654321")
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User with this email already exists"

    async def test_register_normalizes_email_case(self, client: AsyncClient, region):
        response = await client.post(
            "/api/v1/auth/register", json=registration_payload(region.id, email="Ali.Valiyev@Example.COM")
        )
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "ali.valiyev@example.com"

        response = await client.post(
            "/api/v1/auth/register",
            json=registration_payload(region.id, email="ALI.VALIYEV@example.com", phone="+998907654321"),
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User with this email already exists"

    async def test_register_duplicate_phone(self, client: AsyncClient, region):
        await client.post("/api/v1/auth/register", json=registration_payload(region.id))
        response = await client.post(
            "/api/v1/auth/register", json=registration_payload(region.id, email="other@example.com")
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User with this phone number already exists"

    async def test_register_unknown_region(self, client: AsyncClient, region):
        response = await client.post("/api/v1/auth/register", json=registration_payload(region.id + 100))
        assert response.status_code == 400
        assert response.json()["detail"] == "Region not found"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("phone", "998901234567"),
            ("phone", "+99890123"),
            ("email", "not-an-email"),
            ("password", "123"),
            ("full_name", "A"),
            ("year", 2099),
            ("year", 1800),
        ],
    )
    async def test_register_invalid_fields(self, client: AsyncClient, region, field, value):
        response = await client.post("/api/v1/auth/register", json=registration_payload(region.id, **{field: value}))
        assert response.status_code == 400
        body = response.json()
        assert body["detail"]
        assert body["errors"]


class TestOtp:
    """Test OTP sending and verification."""

    async def test_send_otp_unknown_user(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/send-otp", json={"email": "ghost@example.com"})
        assert response.status_code == 404

    async def test_send_otp(self, client: AsyncClient, member, mailer):
        response = await client.post("/api/v1/auth/send-otp", json={"email": member.email})
        assert response.status_code == 200
        assert mailer.sent[-1][0] == member.email

    async def test_verify_activates_user(self, client: AsyncClient, region):
        await client.post("/api/v1/auth/register", json=registration_payload(region.id))
        response = await client.post(
            "/api/v1/auth/verify", json={"email": "ali@example.com", "otp": generate_otp("ali@example.com")}
        )
        assert response.status_code == 200

        tokens = await login(client, "ali@example.com", "secret123")
        assert tokens["access_token"]

    async def test_verify_wrong_code(self, client: AsyncClient, region):
        await client.post("/api/v1/auth/register", json=registration_payload(region.id))
        code = generate_otp("ali@example.com")
        wrong = "000000" if code != "000000" else "111111"
        response = await client.post("/api/v1/auth/verify", json={"email": "ali@example.com", "otp": wrong})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid OTP"

    async def test_verify_unknown_user(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/verify", json={"email": "ghost@example.com", "otp": "123456"})
        assert response.status_code == 404


class TestLogin:
    """Test login and device sessions."""

    async def test_login_pending_user(self, client: AsyncClient, region):
        await client.post("/api/v1/auth/register", json=registration_payload(region.id))
        response = await client.post("/api/v1/auth/login", json={"email": "ali@example.com", "password": "secret123"})
        assert response.status_code == 400
        assert response.json()["detail"] == "User is not verified"

    async def test_login_ignores_email_case(self, client: AsyncClient, region):
        await register_and_verify(client, region.id, email="Ali@Example.com")

        data = await login(client, "ali@example.com", "secret123")
        assert data["access_token"]
        data = await login(client, "ALI@EXAMPLE.COM", "secret123")
        assert data["access_token"]

    async def test_login_wrong_password(self, client: AsyncClient, member):
        response = await client.post("/api/v1/auth/login", json={"email": member.email, "password": "wrong-pass"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Incorrect password"

    async def test_login_unknown_user(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/login", json={"email": "ghost@example.com", "password": "x"})
        assert response.status_code == 404

    async def test_login_returns_tokens(self, client: AsyncClient, member):
        data = await login(client, member.email, "secret123")
        assert data["token_type"] == "bearer"
        payload = decode_access_token(data["access_token"])
        assert payload.id == member.id
        assert payload.role == "user"
        assert payload.type == "access"

    async def test_login_records_one_session_per_ip(self, client: AsyncClient, member, session):
        await login(client, member.email, "secret123")
        await login(client, member.email, "secret123")

        rows = (await session.execute(select(DeviceSession).where(DeviceSession.user_id == member.id))).scalars().all()
        assert len(rows) == 1
        assert rows[0].ip == "127.0.0.1"
        assert rows[0].data["raw"].startswith("python-httpx")


class TestMe:
    """Test the current user endpoint."""

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Token missing"

    async def test_me_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    async def test_me_rejects_refresh_token(self, client: AsyncClient, member):
        headers = {"Authorization": f"Bearer {create_refresh_token(member)}"}
        response = await client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 401

    async def test_me_without_session(self, client: AsyncClient, member_headers):
        response = await client.get("/api/v1/auth/me", headers=member_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "No sessions found, please login"

    async def test_me_after_login(self, client: AsyncClient, member):
        tokens = await login(client, member.email, "secret123")
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"}
        )
        assert response.status_code == 200
        assert response.json()["email"] == member.email


class TestSessions:
    """Test listing and deleting device sessions."""

    async def test_my_sessions(self, client: AsyncClient, member, member_headers):
        await login(client, member.email, "secret123")
        response = await client.get("/api/v1/auth/my-sessions", headers=member_headers)
        assert response.status_code == 200
        sessions = response.json()
        assert len(sessions) == 1
        assert sessions[0]["user_id"] == member.id

    async def test_delete_own_session(self, client: AsyncClient, member, member_headers):
        await login(client, member.email, "secret123")
        session_id = (await client.get("/api/v1/auth/my-sessions", headers=member_headers)).json()[0]["id"]

        response = await client.delete(f"/api/v1/auth/sessions/{session_id}", headers=member_headers)
        assert response.status_code == 204
        assert (await client.get("/api/v1/auth/my-sessions", headers=member_headers)).json() == []

    async def test_delete_foreign_session_forbidden(self, client: AsyncClient, member, ceo_headers, member_headers):
        await login(client, member.email, "secret123")
        session_id = (await client.get("/api/v1/auth/my-sessions", headers=member_headers)).json()[0]["id"]

        response = await client.delete(f"/api/v1/auth/sessions/{session_id}", headers=ceo_headers)
        assert response.status_code == 403

    async def test_admin_deletes_any_session(self, client: AsyncClient, member, member_headers, admin_headers):
        await login(client, member.email, "secret123")
        session_id = (await client.get("/api/v1/auth/my-sessions", headers=member_headers)).json()[0]["id"]

        response = await client.delete(f"/api/v1/auth/sessions/{session_id}", headers=admin_headers)
        assert response.status_code == 204

    async def test_delete_missing_session(self, client: AsyncClient, member_headers):
        response = await client.delete("/api/v1/auth/sessions/999", headers=member_headers)
        assert response.status_code == 404


class TestPasswordAndRefresh:
    """Test password change and token refresh."""

    async def test_change_password(self, client: AsyncClient, member):
        response = await client.post(
            "/api/v1/auth/change-password",
            json={"email": member.email, "password": "secret123", "new_password": "newsecret1"},
        )
        assert response.status_code == 200

        await login(client, member.email, "newsecret1")
        old = await client.post("/api/v1/auth/login", json={"email": member.email, "password": "secret123"})
        assert old.status_code == 400

    async def test_change_password_wrong_current(self, client: AsyncClient, member):
        response = await client.post(
            "/api/v1/auth/change-password",
            json={"email": member.email, "password": "bad-password", "new_password": "newsecret1"},
        )
        assert response.status_code == 400

    async def test_change_password_short_new_password(self, client: AsyncClient, member):
        response = await client.post(
            "/api/v1/auth/change-password",
            json={"email": member.email, "password": "secret123", "new_password": "123"},
        )
        assert response.status_code == 400

    async def test_refresh_token(self, client: AsyncClient, member):
        tokens = await login(client, member.email, "secret123")
        response = await client.post(
            "/api/v1/auth/refresh-token", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
        )
        assert response.status_code == 200
        payload = decode_access_token(response.json()["access_token"])
        assert payload.id == member.id
        assert payload.role == "user"

    async def test_refresh_rejects_access_token(self, client: AsyncClient, member_headers):
        response = await client.post("/api/v1/auth/refresh-token", headers=member_headers)
        assert response.status_code == 401

    async def test_full_registration_flow(self, client: AsyncClient, region):
        payload = await register_and_verify(client, region.id, email="flow@example.com", phone="+998909998877")
        tokens = await login(client, payload["email"], payload["password"])
        me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
        assert me.status_code == 200
        assert me.json()["status"] == "active"
