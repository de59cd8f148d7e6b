"""Tests for socket payload contracts."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.realtime.protocol import (
    ActivityUpdated,
    HandshakeAuth,
    SendMessagePayload,
    UpdateActivityPayload,
)


def test_handshake_reads_user_id_alias():
    auth = HandshakeAuth.model_validate({"userId": "u1", "extra": "ignored"})
    assert auth.user_id == "u1"
    assert auth.token is None


def test_update_activity_allows_missing_label():
    assert UpdateActivityPayload.model_validate({}).activity is None


def test_send_message_requires_receiver_and_content():
    with pytest.raises(ValidationError):
        SendMessagePayload.model_validate({"senderId": str(uuid4()), "content": "hi"})
    with pytest.raises(ValidationError):
        SendMessagePayload.model_validate(
            {"senderId": str(uuid4()), "receiverId": str(uuid4()), "content": ""}
        )


def test_send_message_rejects_non_uuid_ids():
    with pytest.raises(ValidationError):
        SendMessagePayload.model_validate(
            {"senderId": "db1", "receiverId": "db2", "content": "hi"}
        )


def test_activity_updated_wire_format():
    wire = ActivityUpdated(user_id="u1", activity="Playing").to_wire()
    assert wire == {"userId": "u1", "activity": "Playing"}
