"""
Activity API: log listens and read the following feed.

Logged listens are also pushed to every connected socket as `new_activity`.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.config import Settings, get_settings
from app.db import get_db
from app.infra.logging_config import get_logger
from app.models.user import User
from app.realtime.relay import RelayServer
from app.routers.utils.dependencies import get_relay
from app.schemas.activity import ActivityRead, LogListenRequest
from app.services.activity_service import ActivityService
from app.services.song_service import SongService

logger = get_logger("activity")

activity_router = APIRouter(prefix="/activity", tags=["Activity"])


def _record_listen(db: Session, user: User, song_id: UUID) -> Optional[ActivityRead]:
    if SongService(db).get_song(song_id) is None:
        return None
    activity = ActivityService(db).log_listen(user, song_id)
    return ActivityRead.model_validate(activity)


@activity_router.post("/log-listen", response_model=ActivityRead, status_code=201)
async def log_listen(
    body: LogListenRequest,
    current_user: User = Depends(get_current_user),
    relay: RelayServer = Depends(get_relay),
    db: Session = Depends(get_db),
) -> ActivityRead:
    """Record a listen and broadcast it to connected clients."""
    # The loop is shared with the socket relay; keep the database off it
    result = await run_in_threadpool(_record_listen, db, current_user, body.song_id)
    if result is None:
        raise HTTPException(status_code=400, detail="Song ID and valid user are required")
    logger.debug("User %s listened to %s", current_user.external_id, body.song_id)
    await relay.broadcast_new_activity(result.model_dump(mode="json"))
    return result


@activity_router.get("/feed", response_model=List[ActivityRead])
def get_feed(
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> List[ActivityRead]:
    """Latest listens from followed users, newest first."""
    activities = ActivityService(db).get_feed(current_user, limit=settings.feed_limit)
    return [ActivityRead.model_validate(a) for a in activities]
