from datetime import datetime, timezone

from flask_login import UserMixin
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Ordered from lowest to highest; the position doubles as the trend score.
MOOD_LABELS = ["angry", "sad", "stressed", "nervous", "neutral", "calm", "happy", "excited"]
MOOD_VALUES = {mood: index + 1 for index, mood in enumerate(MOOD_LABELS)}


def utcnow():
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value):
    return value.isoformat() if value else None


class User(UserMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    firebase_uid = Column(String(128), unique=True)
    display_name = Column(String(255))
    email = Column(String(255))
    photo_url = Column(Text)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    entries = relationship("Entry", back_populates="user")

    def to_dict(self):
        """Public view of the account; the password hash never leaves the server."""
        return {
            "id": self.id,
            "username": self.username,
            "displayName": self.display_name,
            "email": self.email,
            "photoURL": self.photo_url,
            "uid": self.firebase_uid,
            "createdAt": _isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"


class Entry(Base):
    __tablename__ = "entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    mood = Column(String(32))
    is_public = Column(Boolean, default=False, nullable=False)
    image_url = Column(Text)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    sentiment_analysis = Column(JSON)

    user = relationship("User", back_populates="entries")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "mood": self.mood,
            "isPublic": self.is_public,
            "imageUrl": self.image_url,
            "createdAt": _isoformat(self.created_at),
            "sentimentAnalysis": self.sentiment_analysis,
        }

    def __repr__(self):
        return f"<Entry(id={self.id}, user_id={self.user_id}, mood={self.mood})>"


class WebSession(Base):
    __tablename__ = "web_sessions"

    sid = Column(String(64), primary_key=True)
    data = Column(Text, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<WebSession(sid={self.sid[:8]}..., expires_at={self.expires_at})>"
