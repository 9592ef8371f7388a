"""
Shared response envelopes.
"""

from __future__ import annotations

from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

ItemType = TypeVar("ItemType")


class Page(BaseModel, Generic[ItemType]):
    """One page of a list endpoint."""

    total: int = Field(description="Number of matching records")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    data: List[ItemType] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str


class UploadRead(BaseModel):
    """Public URL path of a stored upload."""

    url: str = Field(description="Path under /uploads")
