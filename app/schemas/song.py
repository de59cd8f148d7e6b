"""Pydantic schemas for songs, albums, likes and comments."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from app.schemas.user import UserSummary

COMMENT_MAX_LENGTH = 500


class SongRead(BaseModel):
    id: UUID
    title: str
    artist: str
    image_url: str
    audio_url: str
    duration: int
    lyrics: str = ""
    album_id: Optional[UUID] = None
    like_count: int = 0
    created_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_song(cls, song) -> "SongRead":
        return cls.model_validate(song).model_copy(update={"like_count": len(song.likes)})


class AlbumRead(BaseModel):
    id: UUID
    title: str
    artist: str
    image_url: str
    release_year: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AlbumDetail(AlbumRead):
    songs: List[SongRead] = []


class LikeToggleResult(BaseModel):
    liked: bool
    likes: int


class CommentCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        # Length is checked on the trimmed text, as stored
        v = v.strip()
        if not v:
            raise ValueError("Comment text is required")
        if len(v) > COMMENT_MAX_LENGTH:
            raise ValueError(f"Comment text is limited to {COMMENT_MAX_LENGTH} characters")
        return v


class CommentRead(BaseModel):
    id: UUID
    song_id: UUID
    text: str
    user: UserSummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
