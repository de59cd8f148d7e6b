"""Album model: a titled group of songs by one artist."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, Integer, String, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin


class Album(Base, TimestampMixin):
    __tablename__ = "albums"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(256), nullable=False)
    artist = Column(String(256), nullable=False)
    image_url = Column(String(1024), nullable=False)
    release_year = Column(Integer, nullable=True)

    songs = relationship("Song", back_populates="album", order_by="Song.created_at")
