"""
I/O models for course registrations, comments and likes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseRegisterCreate(BaseModel):
    edu_id: int = Field(gt=0)
    soha_id: int = Field(gt=0)
    fan_id: int = Field(gt=0)
    fillial_id: int = Field(gt=0)


class CourseRegisterUpdate(BaseModel):
    edu_id: Optional[int] = Field(default=None, gt=0)
    soha_id: Optional[int] = Field(default=None, gt=0)
    fan_id: Optional[int] = Field(default=None, gt=0)
    fillial_id: Optional[int] = Field(default=None, gt=0)


class CourseRegisterRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    edu_id: int
    soha_id: int
    fan_id: int
    fillial_id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class CommentCreate(BaseModel):
    comment: str = Field(min_length=2, max_length=250)
    star: int = Field(ge=0, le=5, description="Rating from 0 to 5")
    edu_id: int = Field(gt=0)


class CommentUpdate(BaseModel):
    comment: Optional[str] = Field(default=None, min_length=2, max_length=250)
    star: Optional[int] = Field(default=None, ge=0, le=5)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    edu_id: int
    comment: str
    star: int
    created_at: datetime
    updated_at: datetime


class LikeCreate(BaseModel):
    edu_id: int = Field(gt=0)


class LikeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    edu_id: int
    created_at: datetime
