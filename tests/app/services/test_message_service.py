"""Tests for MessageService."""

from app.services.message_service import MessageService


def test_create_message(db, setup_user, setup_other_user):
    msg = MessageService(db).create_message(setup_user.id, setup_other_user.id, "hi")
    assert msg.id is not None
    assert msg.sender_id == setup_user.id
    assert msg.receiver_id == setup_other_user.id
    assert msg.content == "hi"
    assert msg.created_at is not None


def test_get_conversation_both_directions_in_order(db, faker, setup_user, setup_other_user):
    from tests.fixtures.user_fixtures import make_user

    svc = MessageService(db)
    third = make_user(db, faker)
    svc.create_message(setup_user.id, setup_other_user.id, "one")
    svc.create_message(setup_other_user.id, setup_user.id, "two")
    svc.create_message(setup_user.id, third.id, "elsewhere")
    svc.create_message(setup_user.id, setup_other_user.id, "three")

    conversation = svc.get_conversation(setup_user.id, setup_other_user.id)
    assert [m.content for m in conversation] == ["one", "two", "three"]
