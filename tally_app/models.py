"""Database models."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from flask_login import UserMixin

from .extensions import db


# Settings key holding the shared reward value; never usable as a counter name.
VALUE_PER_CLICK_KEY = "valuePerClick"


def utcnow() -> datetime:
    """Current UTC time, rounded up to the next whole millisecond."""
    now = datetime.now(timezone.utc)
    spare = now.microsecond % 1000
    if spare:
        now += timedelta(microseconds=1000 - spare)
    return now


def isoformat(value: datetime | None) -> str | None:
    """Render a timestamp as ISO-8601 UTC with millisecond precision."""
    if value is None:
        return None
    if value.tzinfo is None:
        # SQLite hands back naive datetimes; everything is stored in UTC.
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class User(UserMixin, db.Model):
    __tablename__ = "users"

    username = db.Column(db.String(255), primary_key=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def get_id(self) -> str:
        return self.username

    def __repr__(self) -> str:
        return f"<User(username={self.username})>"


class AuthSession(db.Model):
    """Issued login token. `username` is a plain reference, checked on lookup."""

    __tablename__ = "sessions"

    token = db.Column(db.String(64), primary_key=True)
    username = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)


class NamedCounter(db.Model):
    __tablename__ = "counters"
    __table_args__ = (db.CheckConstraint("count >= 0", name="ck_counters_count_non_negative"),)

    name = db.Column(db.String(255), primary_key=True)
    count = db.Column(db.Integer, default=0, nullable=False)
    last_clicked_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self) -> dict:
        return {"count": self.count, "lastClickedAt": isoformat(self.last_clicked_at)}

    def __repr__(self) -> str:
        return f"<NamedCounter(name={self.name}, count={self.count})>"


class Setting(db.Model):
    __tablename__ = "settings"

    key = db.Column(db.String(64), primary_key=True)
    # JSON-encoded so the stored value round-trips with its original type.
    value = db.Column(db.Text, nullable=True)
