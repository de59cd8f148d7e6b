from app.models.activity import Activity
from app.models.album import Album
from app.models.message import Message
from app.models.song import Song, SongComment, SongLike
from app.models.user import User

__all__ = [
    "Activity",
    "Album",
    "Message",
    "Song",
    "SongComment",
    "SongLike",
    "User",
]
