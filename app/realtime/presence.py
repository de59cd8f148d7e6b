from __future__ import annotations

from typing import Dict, Optional

DEFAULT_ACTIVITY = "Idle"


class PresenceRegistry:
    """
    Who is online (external id -> socket id) and what they are doing
    (external id -> activity label).

    One instance per process, owned by the relay. Nothing here is persisted;
    a restart forgets everyone until they reconnect.
    """

    def __init__(self) -> None:
        self._connections: Dict[str, str] = {}
        self._activities: Dict[str, str] = {}

    def register(self, external_id: str, sid: str) -> None:
        # A reconnect replaces the previous socket but keeps the activity
        self._connections[external_id] = sid
        self._activities.setdefault(external_id, DEFAULT_ACTIVITY)

    def unregister(self, external_id: str) -> None:
        self._connections.pop(external_id, None)
        self._activities.pop(external_id, None)

    def set_activity(self, external_id: str, label: str) -> bool:
        """Returns False (and changes nothing) if the id is no longer registered."""
        if not self.is_online(external_id):
            return False
        self._activities[external_id] = label
        return True

    def get_connection(self, external_id: str) -> Optional[str]:
        return self._connections.get(external_id)

    def get_activity(self, external_id: str) -> Optional[str]:
        return self._activities.get(external_id)

    def is_online(self, external_id: str) -> bool:
        return external_id in self._connections

    def online_ids(self) -> list[str]:
        return list(self._connections.keys())

    def activity_pairs(self) -> list[tuple[str, str]]:
        return list(self._activities.items())

    def snapshot(self) -> tuple[list[str], list[tuple[str, str]]]:
        """(online external ids, (external id, activity) pairs)."""
        return self.online_ids(), self.activity_pairs()

    def __len__(self) -> int:
        return len(self._connections)
