from fastapi import APIRouter, Depends

from app.realtime.relay import RelayServer
from app.routers.utils.dependencies import get_relay
from app.schemas.presence import PresenceSnapshot

presence_router = APIRouter(prefix="/presence", tags=["Presence"])


@presence_router.get("", response_model=PresenceSnapshot)
def get_presence(relay: RelayServer = Depends(get_relay)) -> PresenceSnapshot:
    """Who is online right now and what they are doing."""
    online, activities = relay.registry.snapshot()
    return PresenceSnapshot(users_online=online, activities=activities)
