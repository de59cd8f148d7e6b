"""In-memory stand-ins for the socket server and the message store."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

import pytest

from app.auth.identity import InvalidTokenError
from app.realtime.gateway import MessageGateway
from app.realtime.presence import PresenceRegistry
from app.realtime.relay import RelayServer
from app.schemas.message import MessageRead
from app.schemas.user import UserSummary


class FakeSocketServer:
    """Records every emission per target socket, like socketio.AsyncServer.emit."""

    def __init__(self) -> None:
        self.connected: list[str] = []
        self.sent: list[tuple[str, str, Any]] = []
        self.handlers: dict[str, Any] = {}
        # events whose emission raises, as a dropped transport would
        self.failing_events: set[str] = set()

    def on(self, event, handler=None):
        self.handlers[event] = handler

    async def emit(self, event, data=None, to=None, skip_sid=None, **kwargs):
        if event in self.failing_events:
            raise ConnectionError(f"transport closed while sending {event}")
        if to is not None:
            targets = [to] if to in self.connected else []
        else:
            targets = [sid for sid in self.connected if sid != skip_sid]
        for sid in targets:
            self.sent.append((sid, event, data))

    def received(self, sid: str, event: Optional[str] = None) -> list[Any]:
        return [d for s, e, d in self.sent if s == sid and (event is None or e == event)]

    def clear(self) -> None:
        self.sent.clear()


class FakeGateway(MessageGateway):
    def __init__(self) -> None:
        self.users: dict[uuid.UUID, UserSummary] = {}
        self.messages: list[MessageRead] = []
        self.fail_on_create = False
        # awaited while a message is being stored, to interleave other events
        self.during_create: Optional[Callable[[], Awaitable[None]]] = None

    def add_user(self, external_id: str) -> UserSummary:
        user = UserSummary(
            id=uuid.uuid4(), full_name=external_id, image_url="", external_id=external_id
        )
        self.users[user.id] = user
        return user

    async def find_user(self, user_id):
        return self.users.get(user_id)

    async def find_user_by_external_id(self, external_id):
        return next(
            (u for u in self.users.values() if u.external_id == external_id), None
        )

    async def create_message(self, sender_id, receiver_id, content):
        if self.during_create is not None:
            await self.during_create()
        if self.fail_on_create:
            raise RuntimeError("database unavailable")
        now = datetime.now(timezone.utc)
        message = MessageRead(
            id=uuid.uuid4(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self.messages.append(message)
        return message


class FakeIdentityResolver:
    def __init__(self, tokens: dict[str, str]) -> None:
        self.tokens = tokens

    def resolve_token(self, token):
        if token not in self.tokens:
            raise InvalidTokenError("unknown token")
        return self.tokens[token]


async def connect(relay: RelayServer, sid: str, auth: Any) -> bool:
    """Open a socket the way the transport does: joined first, then handshake."""
    relay.sio.connected.append(sid)
    accepted = await relay.on_connect(sid, {}, auth)
    if not accepted:
        relay.sio.connected.remove(sid)
    return accepted


async def disconnect(relay: RelayServer, sid: str) -> None:
    if sid in relay.sio.connected:
        relay.sio.connected.remove(sid)
    await relay.on_disconnect(sid, "client disconnect")


@pytest.fixture
def fake_sio():
    return FakeSocketServer()


@pytest.fixture
def registry():
    return PresenceRegistry()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def relay(fake_sio, registry, gateway):
    return RelayServer(sio=fake_sio, registry=registry, gateway=gateway)
