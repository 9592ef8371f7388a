"""
User and authentication I/O models.

Request bodies carry the field rules enforced at the API edge (lengths,
phone format, birth year range). Response models never expose password
hashes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..domain.enums import SELF_REGISTRATION_ROLES, UserRole

PHONE_PATTERN = r"^\+\d{12}$"

MIN_AGE = 18
MAX_AGE = 149


def normalize_email(value: str) -> str:
    """E-mail addresses are stored and looked up in lower case."""
    return value.strip().lower()


Email = Annotated[EmailStr, AfterValidator(normalize_email)]


def validate_birth_year(year: int) -> int:
    """Birth year must put the user between 18 and 149 years old."""
    current = datetime.now().year
    if year < current - MAX_AGE or year > current - MIN_AGE:
        raise ValueError(f"year must be between {current - MAX_AGE} and {current - MIN_AGE}")
    return year


class UserRead(BaseModel):
    """Schema for reading a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    phone: str
    role: str
    year: int
    status: str
    region_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class UserRegister(BaseModel):
    """Schema for self-registration."""

    full_name: str = Field(min_length=2, max_length=55)
    email: Email
    password: str = Field(min_length=6, max_length=55)
    phone: str = Field(pattern=PHONE_PATTERN, description="International format, e.g. +998901234567")
    role: str = Field(default=UserRole.user.value, description="Either 'user' or 'CEO'")
    region_id: int = Field(gt=0)
    year: int = Field(description="Birth year")

    @field_validator("role")
    @classmethod
    def check_role(cls, value: str) -> str:
        if value not in SELF_REGISTRATION_ROLES:
            raise ValueError(f"role must be one of: {', '.join(SELF_REGISTRATION_ROLES)}")
        return value

    @field_validator("year")
    @classmethod
    def check_year(cls, value: int) -> int:
        return validate_birth_year(value)


class UserRegistered(BaseModel):
    user: UserRead
    message: str


class UserUpdate(BaseModel):
    """Schema for patching a user; all fields optional."""

    full_name: Optional[str] = Field(default=None, min_length=2, max_length=55)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    role: Optional[UserRole] = None
    region_id: Optional[int] = Field(default=None, gt=0)


class EmailRequest(BaseModel):
    email: Email


class VerifyRequest(BaseModel):
    email: Email
    otp: str = Field(min_length=4, max_length=10)


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1, max_length=55)


class ChangePasswordRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1, max_length=55)
    new_password: str = Field(min_length=6, max_length=55)


class LoginResponse(BaseModel):
    message: str
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class DeviceSessionRead(BaseModel):
    """A device the user has logged in from."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    ip: str
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
