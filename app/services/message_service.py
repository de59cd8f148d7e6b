"""
Service for persisting direct messages.

Messages are immutable; only insert. No update/delete of message content.
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.models.message import Message


class MessageService:
    """Create and read direct messages. No update/delete (immutable)."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_message(self, sender_id: UUID, receiver_id: UUID, content: str) -> Message:
        """Persist a message. created_at is assigned here, not by the client."""
        message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def get_conversation(self, user_a: UUID, user_b: UUID) -> List[Message]:
        """Messages exchanged between two users in either direction, oldest first."""
        return (
            self.db.query(Message)
            .filter(
                or_(
                    and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                    and_(Message.sender_id == user_b, Message.receiver_id == user_a),
                )
            )
            .order_by(Message.created_at.asc())
            .all()
        )
