"""Listening activity: record listens and build the following feed."""

from __future__ import annotations

from typing import List
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.models.activity import LISTENED_TO_SONG, Activity
from app.models.user import User
from app.services.user_service import UserService


class ActivityService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def log_listen(self, user: User, song_id: UUID) -> Activity:
        """Record that `user` listened to a song and return it with user/song loaded."""
        activity = Activity(type=LISTENED_TO_SONG, user_id=user.id, song_id=song_id)
        self.db.add(activity)
        self.db.commit()
        return (
            self.db.query(Activity)
            .options(joinedload(Activity.user), joinedload(Activity.song))
            .filter(Activity.id == activity.id)
            .one()
        )

    def get_feed(self, user: User, limit: int = 50) -> List[Activity]:
        """
        Latest activities of the users `user` follows, newest first.

        The user's own activity is excluded even if they somehow follow themselves.
        """
        following_ids = [
            i for i in UserService(self.db).get_following_ids(user) if i != user.id
        ]
        if not following_ids:
            return []
        return (
            self.db.query(Activity)
            .options(joinedload(Activity.user), joinedload(Activity.song))
            .filter(Activity.user_id.in_(following_ids))
            .order_by(Activity.created_at.desc())
            .limit(limit)
            .all()
        )
