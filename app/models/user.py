"""User model: local record of an identity-provider account."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin

user_follows = Table(
    "user_follows",
    Base.metadata,
    Column(
        "follower_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "followed_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class User(Base, TimestampMixin):
    """
    A listener. `id` is the internal id used by messages and activities;
    `external_id` is the identity-provider id used for presence.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String(256), nullable=False)
    image_url = Column(String(1024), nullable=False, default="")
    external_id = Column(String(256), unique=True, nullable=False, index=True)

    following = relationship(
        "User",
        secondary=user_follows,
        primaryjoin=lambda: User.id == user_follows.c.follower_id,
        secondaryjoin=lambda: User.id == user_follows.c.followed_id,
        backref="followers",
    )
