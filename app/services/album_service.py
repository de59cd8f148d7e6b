"""Album lookups."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session, selectinload

from app.models.album import Album
from app.models.song import Song


class AlbumService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_albums_query(self) -> Query[Album]:
        """Get a query for albums, newest first (for pagination)."""
        return self.db.query(Album).order_by(Album.created_at.desc())

    def get_album(self, album_id: UUID) -> Optional[Album]:
        """Fetch an album with its songs (and their likes) loaded."""
        return (
            self.db.query(Album)
            .options(selectinload(Album.songs).selectinload(Song.likes))
            .filter(Album.id == album_id)
            .first()
        )
