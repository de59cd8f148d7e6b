"""Direct message wire shape, shared by the REST API and the socket relay."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MessageRead(BaseModel):
    """
    Persisted message as clients see it.

    Serialize with `by_alias=True`; the chat client reads `_id`, `sender`,
    `receiver`, `createdAt` and `updatedAt`.
    """

    id: UUID = Field(serialization_alias="_id")
    sender_id: UUID = Field(serialization_alias="sender")
    receiver_id: UUID = Field(serialization_alias="receiver")
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
