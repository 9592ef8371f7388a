"""
Request dependencies shared by the API routers.

Authentication reads ``Authorization: Bearer <token>``; role checks compare
the role claim of the access token against the roles a route allows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Callable, Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from educenter.core.models.domain.enums import ADMIN_ROLES, SortOrder
from educenter.server.core.errors import AuthenticationError, PermissionDeniedError
from educenter.server.core.security import TokenPayload, decode_access_token, decode_refresh_token

bearer_scheme = HTTPBearer(auto_error=False)

PERMISSION_DENIED = "You do not have permission to perform this action"


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token missing")
    return credentials.credentials


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenPayload:
    """Decode the bearer access token of the request."""
    return decode_access_token(_bearer_token(credentials))


async def get_refresh_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenPayload:
    """Decode the bearer refresh token of the request."""
    return decode_refresh_token(_bearer_token(credentials))


CurrentUser = Annotated[TokenPayload, Depends(get_current_user)]


def require_roles(*roles: str) -> Callable:
    """Dependency factory allowing only tokens whose role is in ``roles``."""

    async def checker(user: CurrentUser) -> TokenPayload:
        if user.role not in roles:
            raise PermissionDeniedError(PERMISSION_DENIED)
        return user

    return checker


AdminUser = Annotated[TokenPayload, Depends(require_roles(*ADMIN_ROLES))]


def is_admin(user: TokenPayload) -> bool:
    return user.role in ADMIN_ROLES


def ensure_owner_or_admin(user: TokenPayload, owner_id: Optional[int]) -> None:
    """Raise 403 unless the caller owns the record or has an admin role."""
    if user.id != owner_id and not is_admin(user):
        raise PermissionDeniedError(PERMISSION_DENIED)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def parse_sort_order(value: Optional[str]) -> SortOrder:
    """Case-insensitive ``asc``/``desc``; anything else sorts ascending."""
    try:
        return SortOrder((value or "").lower())
    except ValueError:
        return SortOrder.asc


@dataclass
class Pagination:
    """``page``/``limit`` query parameters translated to a row offset."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return self.limit * (self.page - 1)


def get_pagination(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
) -> Pagination:
    return Pagination(page=page, limit=limit)


PaginationDep = Annotated[Pagination, Depends(get_pagination)]
