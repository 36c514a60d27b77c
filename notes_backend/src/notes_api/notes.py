"""
Note normalization and the store queries behind each notes operation.

All lookups are scoped to a single owner; the (user, title) pair is the
natural key of a note.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from notes_database.models import Note

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "N/A"


class NoteExists(Exception):
    """Raised when a note with the same (user, title) key already exists."""


# PUBLIC_INTERFACE
def defaults(payload, now: Optional[datetime] = None):
    """
    Returns a copy of `payload` with an unset date set to the current time
    and an empty description set to "N/A". Title and user are left alone.

    Dates are stored in UTC; a naive date is taken to already be UTC.
    """
    update = {}
    date = payload.date
    if date is None:
        date = now if now is not None else datetime.now(timezone.utc)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    elif date.utcoffset() != timedelta(0):
        date = date.astimezone(timezone.utc)
    if date is not payload.date:
        update["date"] = date
    if not payload.description:
        update["description"] = DEFAULT_DESCRIPTION
    if not update:
        return payload
    return payload.model_copy(update=update)


def exact_filter(user: str, title: str):
    return (Note.title == title, Note.user == user)


def prefix_filter(user: str, prefix: str):
    # substr equality keeps the match anchored and literal regardless of the
    # backend's LIKE semantics; case-sensitivity comes from the column collation.
    return (func.substr(Note.title, 1, len(prefix)) == prefix, Note.user == user)


def owner_filter(user: str):
    return (Note.user == user,)


# PUBLIC_INTERFACE
def create_note(db, payload) -> Note:
    """Persists a normalized note; raises NoteExists on a duplicate key."""
    payload = defaults(payload)
    note = Note(
        title=payload.title,
        description=payload.description,
        user=payload.user,
        date=payload.date,
    )
    db.add(note)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise NoteExists(f"Note '{payload.title}' already exists for '{payload.user}'") from exc
    db.refresh(note)
    return note


# PUBLIC_INTERFACE
def find_note(db, user: str, title: str) -> Optional[Note]:
    return db.query(Note).filter(*exact_filter(user, title)).first()


# PUBLIC_INTERFACE
def find_notes_by_prefix(db, user: str, prefix: str) -> List[Note]:
    return db.query(Note).filter(*prefix_filter(user, prefix)).order_by(Note.id).all()


# PUBLIC_INTERFACE
def find_all_notes(db, user: str) -> List[Note]:
    return db.query(Note).filter(*owner_filter(user)).order_by(Note.id).all()


# PUBLIC_INTERFACE
def update_note(db, user: str, title: str, payload) -> int:
    """
    Sets description and date of the note keyed by (user, title).

    Returns the number of notes matched (0 or 1). The key itself never
    changes, even if the payload carries a different title.
    """
    payload = defaults(payload)
    matched = (
        db.query(Note)
        .filter(*exact_filter(user, title))
        .update(
            {Note.description: payload.description, Note.date: payload.date},
            synchronize_session=False,
        )
    )
    db.commit()
    if payload.title is not None and payload.title != title:
        logger.info("Ignored rename of %r to %r for %r", title, payload.title, user)
    return matched


# PUBLIC_INTERFACE
def delete_note(db, user: str, title: str) -> int:
    """Removes the note keyed by (user, title); returns the number removed."""
    removed = db.query(Note).filter(*exact_filter(user, title)).delete(synchronize_session=False)
    db.commit()
    return removed
