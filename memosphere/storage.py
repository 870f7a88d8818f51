"""Storage access layer: one query per operation over users, entries and web sessions.

Every function opens its own session and closes it before returning, so the
returned objects are detached snapshots. Driver errors propagate to the caller.
"""
from sqlalchemy import extract

from memosphere.database import SessionLocal
from memosphere.models import Entry, User, WebSession

_IMMUTABLE_USER_FIELDS = {"id"}
_IMMUTABLE_ENTRY_FIELDS = {"id", "user_id"}


# ---------- Users ----------

def get_user(user_id):
    session = SessionLocal()
    try:
        return session.get(User, user_id)
    finally:
        session.close()


def get_user_by_username(username):
    session = SessionLocal()
    try:
        return session.query(User).filter(User.username == username).first()
    finally:
        session.close()


def get_user_by_firebase_uid(uid):
    session = SessionLocal()
    try:
        return session.query(User).filter(User.firebase_uid == uid).first()
    finally:
        session.close()


def create_user(username, password, firebase_uid=None, display_name=None, email=None, photo_url=None):
    session = SessionLocal()
    try:
        user = User(
            username=username,
            password=password,
            firebase_uid=firebase_uid,
            display_name=display_name,
            email=email,
            photo_url=photo_url,
        )
        session.add(user)
        session.commit()
        return user
    finally:
        session.close()


def update_user(user_id, **fields):
    session = SessionLocal()
    try:
        user = session.get(User, user_id)
        if user is None:
            return None
        for key, value in fields.items():
            if key not in _IMMUTABLE_USER_FIELDS:
                setattr(user, key, value)
        session.commit()
        return user
    finally:
        session.close()


# ---------- Entries ----------

def create_entry(user_id, title, content, mood=None, is_public=False, image_url=None,
                 sentiment_analysis=None, created_at=None):
    session = SessionLocal()
    try:
        entry = Entry(
            user_id=user_id,
            title=title,
            content=content,
            mood=mood,
            is_public=is_public,
            image_url=image_url,
            sentiment_analysis=sentiment_analysis,
        )
        if created_at is not None:
            entry.created_at = created_at
        session.add(entry)
        session.commit()
        return entry
    finally:
        session.close()


def get_entry_by_id(entry_id):
    session = SessionLocal()
    try:
        return session.get(Entry, entry_id)
    finally:
        session.close()


def get_entries_by_user_id(user_id):
    session = SessionLocal()
    try:
        return (
            session.query(Entry)
            .filter(Entry.user_id == user_id)
            .order_by(Entry.created_at.desc())
            .all()
        )
    finally:
        session.close()


def get_entries_since(user_id, since):
    session = SessionLocal()
    try:
        return (
            session.query(Entry)
            .filter(Entry.user_id == user_id, Entry.created_at >= since)
            .order_by(Entry.created_at.desc())
            .all()
        )
    finally:
        session.close()


def get_public_entries():
    """Public entries paired with their authors, newest first."""
    session = SessionLocal()
    try:
        return (
            session.query(Entry, User)
            .join(User, Entry.user_id == User.id)
            .filter(Entry.is_public.is_(True))
            .order_by(Entry.created_at.desc())
            .all()
        )
    finally:
        session.close()


def update_entry(entry_id, **fields):
    session = SessionLocal()
    try:
        entry = session.get(Entry, entry_id)
        if entry is None:
            return None
        for key, value in fields.items():
            if key not in _IMMUTABLE_ENTRY_FIELDS:
                setattr(entry, key, value)
        session.commit()
        return entry
    finally:
        session.close()


def delete_entry(entry_id):
    session = SessionLocal()
    try:
        deleted = session.query(Entry).filter(Entry.id == entry_id).delete()
        session.commit()
        return deleted > 0
    finally:
        session.close()


def get_on_this_day_entries(user_id, today):
    """Entries from earlier years written on today's month and day."""
    session = SessionLocal()
    try:
        return (
            session.query(Entry)
            .filter(
                Entry.user_id == user_id,
                extract("month", Entry.created_at) == today.month,
                extract("day", Entry.created_at) == today.day,
                extract("year", Entry.created_at) < today.year,
            )
            .order_by(Entry.created_at.desc())
            .all()
        )
    finally:
        session.close()


# ---------- Web sessions ----------

def get_web_session(sid):
    session = SessionLocal()
    try:
        return session.get(WebSession, sid)
    finally:
        session.close()


def save_web_session(sid, data, expires_at):
    session = SessionLocal()
    try:
        stored = session.get(WebSession, sid)
        if stored is None:
            session.add(WebSession(sid=sid, data=data, expires_at=expires_at))
        else:
            stored.data = data
            stored.expires_at = expires_at
        session.commit()
    finally:
        session.close()


def delete_web_session(sid):
    session = SessionLocal()
    try:
        session.query(WebSession).filter(WebSession.sid == sid).delete()
        session.commit()
    finally:
        session.close()


def delete_expired_web_sessions(now):
    """Remove every session row that expired at or before ``now``. Returns the number removed."""
    session = SessionLocal()
    try:
        deleted = session.query(WebSession).filter(WebSession.expires_at <= now).delete()
        session.commit()
        return deleted
    finally:
        session.close()
