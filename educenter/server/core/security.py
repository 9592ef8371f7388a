"""
Password hashing and JSON Web Token helpers.

Access tokens carry the user id and role and are short lived; refresh
tokens carry only the user id and are signed with a separate secret.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from educenter.core.database.entities.users import User

from .config import settings
from .errors import AuthenticationError

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)


class TokenPayload(BaseModel):
    """Decoded claims of an access or refresh token."""

    id: int
    role: Optional[str] = None
    type: str
    iat: int
    exp: int


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _encode(claims: Dict[str, Any], secret: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    """Issue an access token with the user's id and current role."""
    return _encode(
        {"id": user.id, "role": user.role, "type": ACCESS_TOKEN_TYPE},
        settings.jwt_access_secret,
        timedelta(minutes=settings.jwt_access_expires_minutes),
    )


def create_refresh_token(user: User) -> str:
    """Issue a refresh token carrying only the user id."""
    return _encode(
        {"id": user.id, "type": REFRESH_TOKEN_TYPE},
        settings.jwt_refresh_secret,
        timedelta(days=settings.jwt_refresh_expires_days),
    )


def _decode(token: str, secret: str, expected_type: str) -> TokenPayload:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    if payload.get("type") != expected_type:
        raise AuthenticationError("Invalid token")
    try:
        return TokenPayload(**payload)
    except ValueError:
        raise AuthenticationError("Invalid token")


def decode_access_token(token: str) -> TokenPayload:
    return _decode(token, settings.jwt_access_secret, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> TokenPayload:
    return _decode(token, settings.jwt_refresh_secret, REFRESH_TOKEN_TYPE)
