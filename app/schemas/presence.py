from __future__ import annotations

from pydantic import BaseModel


class PresenceSnapshot(BaseModel):
    """Who is online and what they are doing, as held by the relay."""

    users_online: list[str]
    activities: list[tuple[str, str]]
