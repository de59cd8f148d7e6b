"""Tests for SongService."""

from app.services.song_service import SongService
from tests.fixtures.song_fixtures import make_song


def test_toggle_like(db, setup_song):
    svc = SongService(db)
    assert svc.toggle_like(setup_song, "ext_1") is True
    assert svc.toggle_like(setup_song, "ext_2") is True
    assert svc.like_count(setup_song.id) == 2
    assert svc.toggle_like(setup_song, "ext_1") is False
    assert svc.like_count(setup_song.id) == 1


def test_comments_newest_first(db, setup_song, setup_user):
    svc = SongService(db)
    first = svc.add_comment(setup_song, setup_user, "great")
    svc.add_comment(setup_song, setup_user, "still great")
    assert [c.text for c in svc.get_comments(setup_song.id)] == ["still great", "great"]

    svc.delete_comment(first)
    assert svc.get_comment(setup_song.id, first.id) is None
    assert len(svc.get_comments(setup_song.id)) == 1


def test_featured_is_newest_first(db, faker):
    older = make_song(db, faker)
    newer = make_song(db, faker)
    assert [s.id for s in SongService(db).get_featured()] == [newer.id, older.id]


def test_featured_is_limited(db, faker):
    for _ in range(3):
        make_song(db, faker)
    assert len(SongService(db).get_featured(limit=2)) == 2


def test_made_for_you_follows_updates(db, faker):
    edited = make_song(db, faker)
    make_song(db, faker)
    edited.title = "Remastered"
    db.commit()
    assert SongService(db).get_made_for_you()[0].id == edited.id


def test_trending_ranks_by_likes(db, faker):
    older = make_song(db, faker)
    newer = make_song(db, faker)
    untouched = make_song(db, faker)
    svc = SongService(db)
    svc.toggle_like(older, "ext_1")
    svc.toggle_like(older, "ext_2")
    svc.toggle_like(newer, "ext_1")
    assert [s.id for s in svc.get_trending()] == [older.id, newer.id, untouched.id]


def test_trending_only_looks_at_recent_songs(db, faker):
    oldest = make_song(db, faker)
    recent = make_song(db, faker)
    svc = SongService(db)
    svc.toggle_like(oldest, "ext_1")
    assert [s.id for s in svc.get_trending(window=1)] == [recent.id]
