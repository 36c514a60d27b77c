from sqlalchemy import Column, Integer, String, DateTime, Text, UniqueConstraint
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def _key_string(length):
    # MySQL's default collations ignore case; keys compare byte-for-byte everywhere.
    return String(length).with_variant(mysql.VARCHAR(length, collation="utf8mb4_bin"), "mysql")


def _utcnow():
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class Account(Base):
    """
    SQLAlchemy model for an account of the notes app.

    The username is the natural key; it is what issued tokens carry and
    what notes reference as their owner.
    """
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(_key_string(64), unique=True, index=True, nullable=False)
    hashed_password = Column(String(256), nullable=False)
    email = Column(String(128), nullable=False)
    date_of_birth = Column(String(32), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=_utcnow)


# PUBLIC_INTERFACE
class Note(Base):
    """
    SQLAlchemy model for a note, keyed by (user, title).
    """
    __tablename__ = "notes"
    __table_args__ = (UniqueConstraint("user", "title", name="uq_notes_user_title"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(_key_string(128), nullable=False)
    description = Column(Text, nullable=False, default="N/A")
    user = Column(_key_string(64), index=True, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
