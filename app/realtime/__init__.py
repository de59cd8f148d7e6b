"""Real-time presence, activity broadcast and direct-message relay."""

from app.realtime.gateway import MessageGateway, SqlMessageGateway
from app.realtime.presence import DEFAULT_ACTIVITY, PresenceRegistry
from app.realtime.relay import RelayServer

__all__ = [
    "DEFAULT_ACTIVITY",
    "MessageGateway",
    "PresenceRegistry",
    "RelayServer",
    "SqlMessageGateway",
]
