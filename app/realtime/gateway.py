"""
Persistence gateway used by the relay.

The relay runs on the event loop; the gateway runs the blocking database
work in the threadpool and hands back plain schemas, never ORM objects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from fastapi.concurrency import run_in_threadpool

from app.schemas.message import MessageRead
from app.schemas.user import UserSummary
from app.services.message_service import MessageService
from app.services.user_service import UserService
from app.utils.db.db_session_helper import db_session


class MessageGateway(ABC):
    """Contract for the durable store behind the relay."""

    @abstractmethod
    async def find_user(self, user_id: UUID) -> Optional[UserSummary]:
        """Look up a user by internal id. None if there is no such user."""
        ...

    @abstractmethod
    async def find_user_by_external_id(self, external_id: str) -> Optional[UserSummary]:
        ...

    @abstractmethod
    async def create_message(
        self, sender_id: UUID, receiver_id: UUID, content: str
    ) -> MessageRead:
        """Persist a direct message and return it as stored. Raises on failure."""
        ...


class SqlMessageGateway(MessageGateway):
    async def find_user(self, user_id: UUID) -> Optional[UserSummary]:
        return await run_in_threadpool(self._find_user, user_id)

    async def find_user_by_external_id(self, external_id: str) -> Optional[UserSummary]:
        return await run_in_threadpool(self._find_user_by_external_id, external_id)

    async def create_message(
        self, sender_id: UUID, receiver_id: UUID, content: str
    ) -> MessageRead:
        return await run_in_threadpool(
            self._create_message, sender_id, receiver_id, content
        )

    def _find_user(self, user_id: UUID) -> Optional[UserSummary]:
        with db_session() as db:
            user = UserService(db).get_user(user_id)
            return UserSummary.model_validate(user) if user else None

    def _find_user_by_external_id(self, external_id: str) -> Optional[UserSummary]:
        with db_session() as db:
            user = UserService(db).get_user_by_external_id(external_id)
            return UserSummary.model_validate(user) if user else None

    def _create_message(
        self, sender_id: UUID, receiver_id: UUID, content: str
    ) -> MessageRead:
        with db_session() as db:
            message = MessageService(db).create_message(sender_id, receiver_id, content)
            return MessageRead.model_validate(message)
