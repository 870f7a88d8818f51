from datetime import date, datetime

from memosphere import storage
from memosphere.models import utcnow


def _user(username="alice"):
    return storage.create_user(username, "hash.salt")


def test_create_and_fetch_user(app):
    user = storage.create_user("alice", "hash.salt", firebase_uid="uid-1", email="a@example.com")
    assert storage.get_user(user.id).username == "alice"
    assert storage.get_user_by_username("alice").id == user.id
    assert storage.get_user_by_firebase_uid("uid-1").id == user.id
    assert storage.get_user_by_username("nobody") is None


def test_update_user_never_changes_id(app):
    user = _user()
    updated = storage.update_user(user.id, id=999, display_name="Alice A.")
    assert updated.id == user.id
    assert updated.display_name == "Alice A."
    assert storage.update_user(12345, display_name="x") is None


def test_entries_listed_newest_first(app):
    user = _user()
    storage.create_entry(user.id, "old", "old", created_at=datetime(2024, 1, 1))
    storage.create_entry(user.id, "new", "new", created_at=datetime(2025, 1, 1))
    titles = [entry.title for entry in storage.get_entries_by_user_id(user.id)]
    assert titles == ["new", "old"]


def test_update_entry_keeps_owner(app):
    owner = _user("owner")
    other = _user("other")
    entry = storage.create_entry(owner.id, "t", "c")
    updated = storage.update_entry(entry.id, user_id=other.id, title="changed")
    assert updated.user_id == owner.id
    assert updated.title == "changed"


def test_delete_entry(app):
    user = _user()
    entry = storage.create_entry(user.id, "t", "c")
    assert storage.delete_entry(entry.id) is True
    assert storage.get_entry_by_id(entry.id) is None
    assert storage.delete_entry(entry.id) is False


def test_public_entries_join_author(app):
    alice = storage.create_user("alice", "hash.salt", display_name="Alice")
    storage.create_entry(alice.id, "shared", "c", is_public=True)
    storage.create_entry(alice.id, "private", "c")

    rows = storage.get_public_entries()
    assert len(rows) == 1
    entry, author = rows[0]
    assert entry.title == "shared"
    assert author.display_name == "Alice"


def test_on_this_day_matches_earlier_years_only(app):
    user = _user()
    other = _user("bob")
    today = date(2026, 10, 19)
    storage.create_entry(user.id, "last year", "c", created_at=datetime(2025, 10, 19, 8, 30))
    storage.create_entry(user.id, "two years", "c", created_at=datetime(2024, 10, 19, 23, 0))
    storage.create_entry(user.id, "today", "c", created_at=datetime(2026, 10, 19, 9, 0))
    storage.create_entry(user.id, "day before", "c", created_at=datetime(2025, 10, 18))
    storage.create_entry(user.id, "next month", "c", created_at=datetime(2025, 11, 19))
    storage.create_entry(other.id, "not mine", "c", created_at=datetime(2025, 10, 19))

    titles = [entry.title for entry in storage.get_on_this_day_entries(user.id, today)]
    assert titles == ["last year", "two years"]


def test_entries_since(app):
    user = _user()
    storage.create_entry(user.id, "before", "c", created_at=datetime(2026, 9, 1))
    storage.create_entry(user.id, "after", "c", created_at=datetime(2026, 10, 1))
    titles = [entry.title for entry in storage.get_entries_since(user.id, datetime(2026, 9, 19))]
    assert titles == ["after"]


def test_web_session_roundtrip(app):
    expires = datetime(2030, 1, 1)
    storage.save_web_session("abc", '{"k": 1}', expires)
    assert storage.get_web_session("abc").data == '{"k": 1}'

    storage.save_web_session("abc", '{"k": 2}', expires)
    assert storage.get_web_session("abc").data == '{"k": 2}'

    storage.delete_web_session("abc")
    assert storage.get_web_session("abc") is None


def test_delete_expired_web_sessions(app):
    now = datetime(2030, 1, 1, 12, 0)
    storage.save_web_session("stale", "{}", datetime(2030, 1, 1, 11, 0))
    storage.save_web_session("edge", "{}", now)
    storage.save_web_session("live", "{}", datetime(2030, 1, 2))

    assert storage.delete_expired_web_sessions(now) == 2
    assert storage.get_web_session("stale") is None
    assert storage.get_web_session("edge") is None
    assert storage.get_web_session("live") is not None


def test_created_at_defaults_to_naive_utc(app):
    before = utcnow()
    user = _user()
    entry = storage.create_entry(user.id, "t", "c")
    assert entry.created_at.tzinfo is None
    assert user.created_at.tzinfo is None
    assert before <= entry.created_at <= utcnow()
