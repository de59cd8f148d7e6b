"""Pydantic schemas for users and follows."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class UserSummary(BaseModel):
    """Compact author info embedded in comments and activities."""

    id: UUID
    full_name: str
    image_url: str
    external_id: str

    model_config = {"from_attributes": True}


class UserRead(UserSummary):
    created_at: datetime
    updated_at: datetime


class UserSync(BaseModel):
    """Profile fields pushed by the client after sign-in."""

    full_name: str = Field(..., min_length=1, max_length=256)
    image_url: str = Field("", max_length=1024)


class FollowToggleResult(BaseModel):
    message: str
    action: Literal["followed", "unfollowed"]
