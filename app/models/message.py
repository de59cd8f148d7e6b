"""Message model: one row per direct message between two users."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, Index, Text, Uuid

from app.db import Base
from app.models.mixins import TimestampMixin


class Message(Base, TimestampMixin):
    """Direct message. Rows are insert-only; ordering is by created_at."""

    __tablename__ = "messages"

    __table_args__ = (
        Index("ix_messages_sender_receiver_created", "sender_id", "receiver_id", "created_at"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sender_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    receiver_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content = Column(Text, nullable=False)
