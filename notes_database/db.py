import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_STORE_TIMEOUT_SECONDS = 5.0

# Sessions are unbound until init_engine() runs at startup.
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

_engine = None


class ConfigurationError(ValueError):
    """Raised when the store connection parameters are missing or unusable."""


# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment variable DATABASE_URL.
    """
    load_dotenv()
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise ConfigurationError("DATABASE_URL environment variable not set.")
    return db_url


def _connect_args(parsed, timeout):
    backend = parsed.get_backend_name()
    if backend == "sqlite":
        return {"check_same_thread": False, "timeout": timeout}
    if backend == "postgresql":
        ms = int(timeout * 1000)
        return {"connect_timeout": max(int(timeout), 1), "options": f"-c statement_timeout={ms}"}
    if backend == "mysql":
        return {"connect_timeout": max(int(timeout), 1)}
    return {}


# PUBLIC_INTERFACE
def create_store_engine(url: str, timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS) -> Engine:
    """
    Build an engine whose round trips are bounded by `timeout` seconds.

    The bound covers pool checkout and, where the driver supports it, the
    connect and statement phases. In-memory SQLite shares a single
    connection so every session sees the same tables.
    """
    try:
        parsed = make_url(url)
    except ArgumentError as exc:
        raise ConfigurationError(f"Invalid DATABASE_URL: {exc}") from exc

    kwargs = {"future": True, "echo": False, "connect_args": _connect_args(parsed, timeout)}
    if parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_timeout"] = timeout
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


# PUBLIC_INTERFACE
def init_engine(url=None, timeout=DEFAULT_STORE_TIMEOUT_SECONDS):
    """
    Creates the process-wide engine and binds SessionLocal to it.

    Called once at startup; raises ConfigurationError when no URL is
    available so the process never serves traffic without a store.
    """
    global _engine
    if url is None:
        url = get_database_url()
    engine = create_store_engine(url, timeout)
    SessionLocal.configure(bind=engine)
    _engine = engine
    logger.info("Store engine initialised for backend %s", engine.url.get_backend_name())
    return engine


def dispose_engine():
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
