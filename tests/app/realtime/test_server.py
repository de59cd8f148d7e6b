"""Tests for socket server construction."""

import socketio

from app.config import get_settings
from app.realtime.presence import PresenceRegistry
from app.realtime.server import build_relay, create_socket_server
from tests.fixtures.relay_fixtures import FakeGateway


def test_socket_server_is_async_asgi():
    sio = create_socket_server(get_settings())
    assert isinstance(sio, socketio.AsyncServer)
    assert sio.eio.async_mode == "asgi"


def test_build_relay_attaches_handlers():
    registry = PresenceRegistry()
    relay = build_relay(get_settings(), registry=registry, gateway=FakeGateway())
    assert relay.registry is registry
    assert relay.hardened_identity is False
    handlers = relay.sio.handlers["/"]
    assert {"connect", "disconnect", "update_activity", "send_message"} <= set(handlers)


def test_each_relay_gets_its_own_registry():
    a = build_relay(get_settings(), gateway=FakeGateway())
    b = build_relay(get_settings(), gateway=FakeGateway())
    assert a.registry is not b.registry
