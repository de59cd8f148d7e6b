"""Albums API: browse albums and their tracks."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.album import Album
from app.routers.utils.dependencies import get_album_by_id
from app.schemas.song import AlbumDetail, AlbumRead, SongRead
from app.services.album_service import AlbumService

albums_router = APIRouter(prefix="/albums", tags=["Album"])


@albums_router.get("", response_model=Page[AlbumRead])
def list_albums(
    params: Params = Depends(),
    db: Session = Depends(get_db),
) -> Page[AlbumRead]:
    """List albums, newest first."""
    return paginate(AlbumService(db).get_albums_query(), params=params)


@albums_router.get("/{album_id}", response_model=AlbumDetail)
def get_album(album: Album = Depends(get_album_by_id)) -> AlbumDetail:
    """An album with its songs in track order."""
    return AlbumDetail(
        **AlbumRead.model_validate(album).model_dump(),
        songs=[SongRead.from_song(s) for s in album.songs],
    )
