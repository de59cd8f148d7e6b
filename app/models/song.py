"""Song model plus its likes and comments."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin


class Song(Base, TimestampMixin):
    __tablename__ = "songs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(256), nullable=False)
    artist = Column(String(256), nullable=False)
    image_url = Column(String(1024), nullable=False)
    audio_url = Column(String(1024), nullable=False)
    duration = Column(Integer, nullable=False, default=0)
    lyrics = Column(Text, nullable=False, default="")
    album_id = Column(
        Uuid, ForeignKey("albums.id", ondelete="SET NULL"), nullable=True, index=True
    )

    album = relationship("Album", back_populates="songs")

    likes = relationship(
        "SongLike", back_populates="song", cascade="all, delete-orphan"
    )
    comments = relationship(
        "SongComment",
        back_populates="song",
        cascade="all, delete-orphan",
        order_by="SongComment.created_at",
    )


class SongLike(Base, TimestampMixin):
    """One row per (song, listener) like. Keyed by external id for a fast toggle."""

    __tablename__ = "song_likes"
    __table_args__ = (UniqueConstraint("song_id", "external_id"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    song_id = Column(
        Uuid, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False
    )
    external_id = Column(String(256), nullable=False)

    song = relationship("Song", back_populates="likes")


class SongComment(Base, TimestampMixin):
    __tablename__ = "song_comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    song_id = Column(
        Uuid, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    text = Column(String(500), nullable=False)

    song = relationship("Song", back_populates="comments")
    user = relationship("User")
