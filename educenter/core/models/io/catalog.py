"""
I/O models for the reference catalog: regions, categories, resources,
subjects (fan) and fields (soha).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RegionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class RegionCreate(BaseModel):
    name: str = Field(min_length=2, max_length=55)


class RegionUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=55)


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str
    created_at: datetime
    updated_at: datetime


class CategoryCreate(BaseModel):
    name: str = Field(min_length=2, max_length=55)
    image: str = Field(min_length=2, max_length=255)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=55)
    image: Optional[str] = Field(default=None, min_length=2, max_length=255)


class ResourceRead(BaseModel):
    """Resource with the author's name and the category name joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    media: str
    description: str
    user_id: int
    category_id: int
    user_full_name: Optional[str] = None
    category_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ResourceCreate(BaseModel):
    name: str = Field(min_length=2, max_length=55)
    media: str = Field(min_length=2, max_length=255)
    description: str = Field(min_length=2)
    category_id: int = Field(gt=0)


class ResourceUpdate(BaseModel):
    """At least one of name, media or description must be given."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=55)
    media: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, min_length=2)

    @model_validator(mode="after")
    def require_one_field(self) -> "ResourceUpdate":
        if self.name is None and self.media is None and self.description is None:
            raise ValueError("At least one of name, media or description is required")
        return self


class SubjectRead(BaseModel):
    """Subject (fan) or field (soha)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str
    created_at: datetime
    updated_at: datetime
