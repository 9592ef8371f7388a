"""
Education center and branch (fillial) I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .catalog import RegionRead, SubjectRead


class EduCenterRead(BaseModel):
    """Schema for reading an education center listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str
    phone: str
    license: str
    address: Optional[str] = None
    region_id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class FillialRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: str
    location: str
    image: str
    region_id: int
    edu_id: int
    created_at: datetime
    updated_at: datetime


class EduCenterDetail(EduCenterRead):
    """Center with its region, subjects, fields, branches, rating and likes."""

    region: Optional[RegionRead] = None
    fans: List[SubjectRead] = Field(default_factory=list)
    sohas: List[SubjectRead] = Field(default_factory=list)
    fillials: List[FillialRead] = Field(default_factory=list)
    rating: Optional[float] = Field(default=None, description="Average star rating, null without comments")
    likes: int = Field(default=0, description="Number of likes")


class EduCenterCreate(BaseModel):
    """Schema for creating a center together with its subjects and fields."""

    name: str = Field(min_length=2, max_length=255)
    image: str = Field(min_length=2, max_length=255)
    phone: str = Field(min_length=7, max_length=20)
    license: str = Field(min_length=2, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    region_id: int = Field(gt=0)
    fan_ids: List[int] = Field(min_length=1, description="Subject ids taught at the center")
    soha_ids: List[int] = Field(min_length=1, description="Field ids covered by the center")


class EduCenterUpdate(BaseModel):
    """Schema for patching a center; ``fan_ids``/``soha_ids`` replace the link sets."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    image: Optional[str] = Field(default=None, min_length=2, max_length=255)
    phone: Optional[str] = Field(default=None, min_length=7, max_length=20)
    license: Optional[str] = Field(default=None, min_length=2, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    region_id: Optional[int] = Field(default=None, gt=0)
    fan_ids: Optional[List[int]] = Field(default=None, min_length=1)
    soha_ids: Optional[List[int]] = Field(default=None, min_length=1)


class EduFanCreate(BaseModel):
    edu_id: int = Field(gt=0)
    fan_id: int = Field(gt=0)


class EduFanRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    edu_id: int
    fan_id: int
    created_at: datetime


class EduSohaCreate(BaseModel):
    edu_id: int = Field(gt=0)
    soha_id: int = Field(gt=0)


class EduSohaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    edu_id: int
    soha_id: int
    created_at: datetime


class FillialDetail(FillialRead):
    fans: List[SubjectRead] = Field(default_factory=list)
    sohas: List[SubjectRead] = Field(default_factory=list)


class FillialCreate(BaseModel):
    """Schema for creating a branch with its subjects and fields."""

    name: str = Field(min_length=2, max_length=255)
    phone: str = Field(min_length=7, max_length=20)
    location: str = Field(min_length=2, max_length=255)
    image: str = Field(min_length=2, max_length=255)
    region_id: int = Field(gt=0)
    edu_id: int = Field(gt=0)
    fan_ids: List[int] = Field(default_factory=list)
    soha_ids: List[int] = Field(default_factory=list)


class FillialUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    phone: Optional[str] = Field(default=None, min_length=7, max_length=20)
    location: Optional[str] = Field(default=None, min_length=2, max_length=255)
    image: Optional[str] = Field(default=None, min_length=2, max_length=255)
    region_id: Optional[int] = Field(default=None, gt=0)
    fan_ids: Optional[List[int]] = None
    soha_ids: Optional[List[int]] = None
