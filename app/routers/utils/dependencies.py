from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.album import Album
from app.models.song import Song
from app.models.user import User
from app.realtime.relay import RelayServer
from app.services.album_service import AlbumService
from app.services.song_service import SongService
from app.services.user_service import UserService


def get_user_by_external_id(
    external_id: str,
    db: Session = Depends(get_db),
) -> User:
    """FastAPI dependency to get a user by external id."""
    user = UserService(db).get_user_by_external_id(external_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def get_song_by_id(
    song_id: UUID,
    db: Session = Depends(get_db),
) -> Song:
    """FastAPI dependency to get a song by ID."""
    song = SongService(db).get_song(song_id)
    if song is None:
        raise HTTPException(status_code=404, detail="Song not found")
    return song


def get_relay(request: Request) -> RelayServer:
    return request.app.state.relay


def get_album_by_id(
    album_id: UUID,
    db: Session = Depends(get_db),
) -> Album:
    """FastAPI dependency to get an album (with its songs) by ID."""
    album = AlbumService(db).get_album(album_id)
    if album is None:
        raise HTTPException(status_code=404, detail="Album not found")
    return album
