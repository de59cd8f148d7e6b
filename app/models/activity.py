"""
Activity model: things listeners did that show up in their followers' feed.

Only `listened_to_song` exists today; `type` leaves room for more.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin

LISTENED_TO_SONG = "listened_to_song"


class Activity(Base, TimestampMixin):
    __tablename__ = "activities"

    __table_args__ = (Index("ix_activities_user_created", "user_id", "created_at"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    type = Column(String(32), nullable=False, default=LISTENED_TO_SONG)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    song_id = Column(
        Uuid, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False
    )

    user = relationship("User")
    song = relationship("Song")
