"""Song listing, likes and comments."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from app.models.song import Song, SongComment, SongLike
from app.models.user import User

# Songs per home-page shelf
SHELF_SIZE = 12
TRENDING_WINDOW = 100


class SongService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_song(self, song_id: UUID) -> Optional[Song]:
        return self.db.query(Song).filter(Song.id == song_id).first()

    def get_songs_query(self) -> Query[Song]:
        """Get a query for songs, newest first (for pagination)."""
        return self.db.query(Song).order_by(Song.created_at.desc())

    def get_featured(self, limit: int = SHELF_SIZE) -> List[Song]:
        """The newest songs."""
        return self.get_songs_query().limit(limit).all()

    def get_made_for_you(self, limit: int = SHELF_SIZE) -> List[Song]:
        """The most recently updated songs."""
        return (
            self.db.query(Song).order_by(Song.updated_at.desc()).limit(limit).all()
        )

    def get_trending(
        self, limit: int = SHELF_SIZE, window: int = TRENDING_WINDOW
    ) -> List[Song]:
        """
        Most liked among the `window` newest songs.

        Ties keep recency order.
        """
        recent = self.get_songs_query().limit(window).all()
        return sorted(recent, key=lambda s: len(s.likes), reverse=True)[:limit]

    def like_count(self, song_id: UUID) -> int:
        return self.db.query(SongLike).filter(SongLike.song_id == song_id).count()

    def toggle_like(self, song: Song, external_id: str) -> bool:
        """Like the song for this listener, or remove an existing like. Returns the new state."""
        existing = (
            self.db.query(SongLike)
            .filter(SongLike.song_id == song.id, SongLike.external_id == external_id)
            .first()
        )
        if existing is not None:
            self.db.delete(existing)
            liked = False
        else:
            self.db.add(SongLike(song_id=song.id, external_id=external_id))
            liked = True
        self.db.commit()
        return liked

    def get_comments(self, song_id: UUID) -> List[SongComment]:
        return (
            self.db.query(SongComment)
            .filter(SongComment.song_id == song_id)
            .order_by(SongComment.created_at.desc())
            .all()
        )

    def get_comment(self, song_id: UUID, comment_id: UUID) -> Optional[SongComment]:
        return (
            self.db.query(SongComment)
            .filter(SongComment.song_id == song_id, SongComment.id == comment_id)
            .first()
        )

    def add_comment(self, song: Song, author: User, text: str) -> SongComment:
        comment = SongComment(song_id=song.id, user_id=author.id, text=text)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def delete_comment(self, comment: SongComment) -> None:
        self.db.delete(comment)
        self.db.commit()
