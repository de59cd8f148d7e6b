from app.services.activity_service import ActivityService
from app.services.message_service import MessageService
from app.services.song_service import SongService
from app.services.user_service import UserService

__all__ = [
    "ActivityService",
    "MessageService",
    "SongService",
    "UserService",
]
