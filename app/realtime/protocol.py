"""
Socket event names and payload contracts.

Every client -> server event has exactly one payload model; anything that
does not validate is treated as malformed and never reaches relay logic.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class RelayEvent(str, Enum):
    # client -> server
    UPDATE_ACTIVITY = "update_activity"
    SEND_MESSAGE = "send_message"
    # server -> client
    USERS_ONLINE = "users_online"
    ACTIVITIES = "activities"
    ACTIVITY_UPDATED = "activity_updated"
    RECEIVE_MESSAGE = "receive_message"
    MESSAGE_SENT = "message_sent"
    NEW_ACTIVITY = "new_activity"
    ERROR = "error"


HANDSHAKE_REJECTED = "Unauthorized: a user id is required to connect"
INVALID_TOKEN = "Unauthorized: invalid session token"
MESSAGE_NOT_SENT = "Failed to send message"
MALFORMED_MESSAGE = "Invalid message payload"


class _Payload(BaseModel):
    model_config = {"extra": "ignore", "populate_by_name": True}


class HandshakeAuth(_Payload):
    """`auth` object the client passes when opening the socket."""

    user_id: Optional[str] = Field(None, alias="userId")
    token: Optional[str] = None


class UpdateActivityPayload(_Payload):
    activity: Optional[str] = None


class SendMessagePayload(_Payload):
    """senderId is optional only because hardened mode derives it server-side."""

    sender_id: Optional[UUID] = Field(None, alias="senderId")
    receiver_id: UUID = Field(..., alias="receiverId")
    content: str = Field(..., min_length=1)


class ActivityUpdated(_Payload):
    user_id: str = Field(..., alias="userId")
    activity: str

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
