"""Songs API: listing, home-page shelves, likes, comments."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi_pagination import Page, Params, create_page
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_external_id, get_current_user, is_admin
from app.config import Settings, get_settings
from app.db import get_db
from app.models.song import Song
from app.models.user import User
from app.routers.utils.dependencies import get_song_by_id
from app.schemas.song import CommentCreate, CommentRead, LikeToggleResult, SongRead
from app.services.song_service import SongService

songs_router = APIRouter(prefix="/songs", tags=["Song"])


@songs_router.get("", response_model=Page[SongRead])
def list_songs(
    params: Params = Depends(),
    db: Session = Depends(get_db),
) -> Page[SongRead]:
    """List songs, newest first."""
    page = paginate(SongService(db).get_songs_query(), params=params)
    rows = [SongRead.from_song(s) for s in page.items]
    return create_page(rows, total=page.total, params=page.params)


@songs_router.get("/featured", response_model=List[SongRead])
def featured_songs(db: Session = Depends(get_db)) -> List[SongRead]:
    """The newest songs."""
    return [SongRead.from_song(s) for s in SongService(db).get_featured()]


@songs_router.get("/made-for-you", response_model=List[SongRead])
def made_for_you_songs(db: Session = Depends(get_db)) -> List[SongRead]:
    return [SongRead.from_song(s) for s in SongService(db).get_made_for_you()]


@songs_router.get("/trending", response_model=List[SongRead])
def trending_songs(db: Session = Depends(get_db)) -> List[SongRead]:
    """Most liked of the recent songs."""
    return [SongRead.from_song(s) for s in SongService(db).get_trending()]


@songs_router.post("/{song_id}/like", response_model=LikeToggleResult)
def toggle_like(
    song: Song = Depends(get_song_by_id),
    external_id: str = Depends(get_current_external_id),
    db: Session = Depends(get_db),
) -> LikeToggleResult:
    """Like the song, or remove the caller's like."""
    svc = SongService(db)
    liked = svc.toggle_like(song, external_id)
    return LikeToggleResult(liked=liked, likes=svc.like_count(song.id))


@songs_router.get("/{song_id}/comments", response_model=List[CommentRead])
def list_comments(
    song: Song = Depends(get_song_by_id),
    db: Session = Depends(get_db),
) -> List[CommentRead]:
    return [CommentRead.model_validate(c) for c in SongService(db).get_comments(song.id)]


@songs_router.post("/{song_id}/comments", response_model=CommentRead, status_code=201)
def add_comment(
    data: CommentCreate,
    song: Song = Depends(get_song_by_id),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CommentRead:
    comment = SongService(db).add_comment(song, current_user, data.text)
    return CommentRead.model_validate(comment)


@songs_router.delete("/{song_id}/comments/{comment_id}", status_code=204)
def delete_comment(
    comment_id: UUID,
    song: Song = Depends(get_song_by_id),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> Response:
    """Delete a comment. Only its author or an admin may do this."""
    svc = SongService(db)
    comment = svc.get_comment(song.id, comment_id)
    if comment is None:
        raise HTTPException(status_code=404, detail="Comment not found")
    if comment.user_id != current_user.id and not is_admin(
        current_user.external_id, settings
    ):
        raise HTTPException(status_code=403, detail="Not allowed to delete this comment")
    svc.delete_comment(comment)
    return Response(status_code=204)
