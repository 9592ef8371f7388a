"""
Authentication endpoints.

Covers the account lifecycle: registration with e-mail OTP verification,
login with device session tracking, token refresh and password change.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from educenter.core.database import get_session
from educenter.core.database.entities.device_sessions import DeviceSession
from educenter.core.database.entities.regions import Region
from educenter.core.database.entities.users import User
from educenter.core.database.repositories.users import DeviceSessionRepository, UserRepository
from educenter.core.logging_config import get_logger
from educenter.core.models.domain.enums import UserStatus
from educenter.core.models.io.common import MessageResponse
from educenter.core.models.io.users import (
    AccessTokenResponse,
    ChangePasswordRequest,
    DeviceSessionRead,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    UserRead,
    UserRegister,
    UserRegistered,
    VerifyRequest,
)
from educenter.server.api.deps import CurrentUser, client_ip, ensure_owner_or_admin, get_refresh_payload
from educenter.server.core.errors import BusinessRuleError, NotFoundError
from educenter.server.core.security import (
    TokenPayload,
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
)
from educenter.server.services.devices import describe_device
from educenter.server.services.mailer import Mailer, get_mailer
from educenter.server.services.otp import generate_otp, verify_otp

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


async def _user_by_email(repo: UserRepository, email: str) -> User:
    user = await repo.get_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.post(
    "/register",
    response_model=UserRegistered,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a pending account and e-mail a one-time password to verify it.",
    responses={
        201: {"description": "Account created, OTP sent"},
        400: {"description": "Invalid data, duplicate e-mail/phone or unknown region"},
    },
)
async def register(
    body: UserRegister,
    session: AsyncSession = Depends(get_session),
    mailer: Mailer = Depends(get_mailer),
) -> UserRegistered:
    """
    Register a new account.

    Only the ``user`` and ``CEO`` roles can be chosen here. The account stays
    ``pending`` until the e-mailed OTP is verified.
    """
    repo = UserRepository(session)
    if await repo.get_by_email(body.email) is not None:
        raise BusinessRuleError("User with this email already exists")
    if await repo.get_by_phone(body.phone) is not None:
        raise BusinessRuleError("User with this phone number already exists")
    if await session.get(Region, body.region_id) is None:
        raise BusinessRuleError("Region not found")

    user = User(
        full_name=body.full_name,
        email=body.email,
        password_hash=hash_password(body.password),
        phone=body.phone,
        role=body.role,
        year=body.year,
        region_id=body.region_id,
        status=UserStatus.pending.value,
    )
    user = await repo.create(user)
    logger.info(f"Registered user {user.id} ({user.email})")

    await mailer.send_otp(user.email, generate_otp(user.email))
    return UserRegistered(user=UserRead.model_validate(user), message=f"User created, OTP sent to {user.email}!")


@router.post(
    "/send-otp",
    response_model=MessageResponse,
    summary="Send OTP",
    description="E-mail a fresh one-time password to a registered address.",
)
async def send_otp(
    body: EmailRequest,
    session: AsyncSession = Depends(get_session),
    mailer: Mailer = Depends(get_mailer),
) -> MessageResponse:
    user = await _user_by_email(UserRepository(session), body.email)
    await mailer.send_otp(user.email, generate_otp(user.email))
    return MessageResponse(message=f"OTP sent to {user.email}")


@router.post(
    "/verify",
    response_model=MessageResponse,
    summary="Verify OTP",
    description="Activate an account with the one-time password sent by e-mail.",
)
async def verify(
    body: VerifyRequest,
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    repo = UserRepository(session)
    user = await _user_by_email(repo, body.email)
    if not verify_otp(user.email, body.otp):
        raise BusinessRuleError("Invalid OTP")
    await repo.update(user, {"status": UserStatus.active.value})
    logger.info(f"Verified user {user.id}")
    return MessageResponse(message="Account verified")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Exchange e-mail and password for access and refresh tokens.",
    responses={
        400: {"description": "Account not verified or wrong password"},
        404: {"description": "Unknown e-mail"},
    },
)
async def login(
    body: LoginRequest,
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """
    Log in.

    The first login from a client IP records a device session with the
    parsed User-Agent; ``/me`` requires such a session.
    """
    user = await _user_by_email(UserRepository(session), body.email)
    if user.status != UserStatus.active.value:
        raise BusinessRuleError("User is not verified")
    if not verify_password(body.password, user.password_hash):
        raise BusinessRuleError("Incorrect password")

    ip = client_ip(request)
    sessions = DeviceSessionRepository(session)
    if await sessions.find(user.id, ip) is None:
        device = DeviceSession(user_id=user.id, ip=ip, data=describe_device(request.headers.get("user-agent")))
        await sessions.create(device)
        logger.info(f"Recorded new device session for user {user.id} from {ip}")

    return LoginResponse(
        message="Logged in successfully",
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
    )


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="Profile of the authenticated user; requires a device session for the calling IP.",
)
async def me(
    user: CurrentUser,
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> UserRead:
    if await DeviceSessionRepository(session).find(user.id, client_ip(request)) is None:
        raise BusinessRuleError("No sessions found, please login")
    account = await UserRepository(session).get_by_id(user.id)
    if account is None:
        raise NotFoundError("User not found")
    return UserRead.model_validate(account)


@router.get(
    "/my-sessions",
    response_model=List[DeviceSessionRead],
    summary="My Sessions",
    description="Devices the authenticated user has logged in from.",
)
async def my_sessions(
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> List[DeviceSessionRead]:
    rows = await DeviceSessionRepository(session).list_for_user(user.id)
    return [DeviceSessionRead.model_validate(row) for row in rows]


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Session",
    description="Remove a device session. Admins may remove any session.",
)
async def delete_session(
    session_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    repo = DeviceSessionRepository(session)
    device = await repo.get_by_id(session_id)
    if device is None:
        raise NotFoundError("Session not found")
    ensure_owner_or_admin(user, device.user_id)
    await repo.delete(device)
    logger.info(f"Deleted device session {session_id} of user {device.user_id}")


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Password",
    description="Replace the password after confirming the current one.",
)
async def change_password(
    body: ChangePasswordRequest,
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    repo = UserRepository(session)
    user = await _user_by_email(repo, body.email)
    if not verify_password(body.password, user.password_hash):
        raise BusinessRuleError("Incorrect password")
    await repo.update(user, {"password_hash": hash_password(body.new_password)})
    logger.info(f"Changed password of user {user.id}")
    return MessageResponse(message="Password updated")


@router.post(
    "/refresh-token",
    response_model=AccessTokenResponse,
    summary="Refresh Access Token",
    description="Issue a new access token from a bearer refresh token.",
)
async def refresh_token(
    payload: TokenPayload = Depends(get_refresh_payload),
    session: AsyncSession = Depends(get_session),
) -> AccessTokenResponse:
    user = await UserRepository(session).get_by_id(payload.id)
    if user is None:
        raise NotFoundError("User not found")
    return AccessTokenResponse(access_token=create_access_token(user))
