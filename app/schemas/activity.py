"""Pydantic schemas for the listening activity feed."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.user import UserSummary


class LogListenRequest(BaseModel):
    song_id: UUID = Field(validation_alias=AliasChoices("songId", "song_id"))


class ActivitySong(BaseModel):
    id: UUID
    title: str
    artist: str

    model_config = {"from_attributes": True}


class ActivityRead(BaseModel):
    id: UUID
    type: str
    user: UserSummary
    song: ActivitySong
    created_at: datetime

    model_config = {"from_attributes": True}
