"""
Database initialization script.

Run this script to create the account and note tables, including the
unique constraints on usernames and (user, title) note keys.
"""
from notes_database.db import init_engine
from notes_database.models import Base


# PUBLIC_INTERFACE
def init_db(engine=None):
    """Creates all tables if they do not exist."""
    if engine is None:
        engine = init_engine()
    Base.metadata.create_all(bind=engine)
    return engine


if __name__ == "__main__":
    init_db()
    print("Database tables created successfully.")
