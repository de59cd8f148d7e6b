"""Socket.IO server construction."""

from __future__ import annotations

from typing import Optional

import socketio

from app.auth.identity import get_identity_resolver
from app.config import Settings, get_settings
from app.realtime.gateway import MessageGateway, SqlMessageGateway
from app.realtime.presence import PresenceRegistry
from app.realtime.relay import RelayServer


def create_socket_server(settings: Optional[Settings] = None) -> socketio.AsyncServer:
    """
    Async Socket.IO server restricted to the configured origins.

    always_connect lets a refused client receive the error event before the
    server closes it. Handlers run inline so one socket's events are handled
    in the order they arrive.
    """
    settings = settings or get_settings()
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=settings.allowed_origins,
        cors_credentials=True,
        always_connect=True,
        async_handlers=False,
        ping_interval=settings.socketio_ping_interval,
        ping_timeout=settings.socketio_ping_timeout,
        logger=False,
        engineio_logger=False,
    )


def build_relay(
    settings: Optional[Settings] = None,
    sio: Optional[socketio.AsyncServer] = None,
    registry: Optional[PresenceRegistry] = None,
    gateway: Optional[MessageGateway] = None,
) -> RelayServer:
    """Wire a relay with fresh state and attach it to the socket server."""
    settings = settings or get_settings()
    relay = RelayServer(
        sio=sio or create_socket_server(settings),
        registry=registry if registry is not None else PresenceRegistry(),
        gateway=gateway or SqlMessageGateway(),
        identity_resolver=(
            get_identity_resolver() if settings.relay_hardened_identity else None
        ),
        hardened_identity=settings.relay_hardened_identity,
        strict_payload_errors=settings.strict_payload_errors,
    )
    relay.attach()
    return relay
