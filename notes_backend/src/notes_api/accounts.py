"""Credential store operations for the auth service."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from notes_database.models import Account
from .security import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class AccountExists(Exception):
    """Raised when signing up with a username that is already taken."""


def get_account_by_username(db, username: str) -> Optional[Account]:
    return db.query(Account).filter(Account.username == username).first()


# PUBLIC_INTERFACE
def create_account(db, data) -> Account:
    """Stores a new account with a hashed password."""
    if get_account_by_username(db, data.username):
        raise AccountExists(data.username)
    account = Account(
        username=data.username,
        hashed_password=get_password_hash(data.password),
        email=data.email,
        date_of_birth=data.date_of_birth,
    )
    db.add(account)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise AccountExists(data.username) from exc
    db.refresh(account)
    logger.info("Created account %r", account.username)
    return account


# PUBLIC_INTERFACE
def authenticate(db, username: str, password: str) -> Optional[Account]:
    account = get_account_by_username(db, username)
    hashed = account.hashed_password if account else None
    if not verify_password(password, hashed):
        return None
    return account


# PUBLIC_INTERFACE
def delete_account(db, username: str) -> int:
    removed = db.query(Account).filter(Account.username == username).delete(synchronize_session=False)
    db.commit()
    if removed:
        logger.info("Deleted account %r", username)
    return removed
