import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from notes_api.auth_app import create_app as create_auth_app
from notes_api.config import Settings
from notes_api.deps import get_db
from notes_api.main import create_app as create_notes_app
from notes_database.db import create_store_engine, dispose_engine
from notes_database.models import Base


@pytest.fixture
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"


@pytest.fixture
def settings(sqlite_url):
    """Settings shared by both services so their tokens interoperate."""
    return Settings(database_url=sqlite_url, secret_key="test-secret-key", log_level="DEBUG")


@pytest.fixture
def engine(sqlite_url):
    """A fresh in-memory engine per test, with all tables created."""
    engine = create_store_engine(sqlite_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a SQLAlchemy session for isolated test usage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def _client_for(app, db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def auth_client(settings, db_session):
    """TestClient for the auth service backed by the test session."""
    with _client_for(create_auth_app(settings), db_session) as c:
        yield c
    dispose_engine()


@pytest.fixture
def client(settings, db_session):
    """TestClient for the notes service backed by the test session."""
    with _client_for(create_notes_app(settings), db_session) as c:
        yield c
    dispose_engine()


@pytest.fixture
def user_data():
    """Returns default account data for sign-up."""
    return {
        "username": "alice",
        "password": "alicepassword123",
        "email": "alice@example.com",
        "date_of_birth": "1990-01-01",
    }


@pytest.fixture
def second_user_data():
    """Returns a second account's data."""
    return {
        "username": "bob",
        "password": "bobpassword456",
        "email": "bob@example.com",
        "date_of_birth": "1985-06-15",
    }


def signup_and_auth(auth_client, data):
    """Helper for signing up then signing in to get a token."""
    r1 = auth_client.post("/auth/signup", json=data)
    assert r1.status_code in (201, 409)

    r2 = auth_client.post("/auth/signin", json={
        "username": data["username"], "password": data["password"]
    })
    assert r2.status_code == 200
    return r2.headers["Authorization"]


@pytest.fixture
def auth_header(auth_client, user_data):
    """Returns {'Authorization': 'Bearer <token>'} for alice."""
    token = signup_and_auth(auth_client, user_data)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_header(auth_client, second_user_data):
    """Returns auth header for bob."""
    token = signup_and_auth(auth_client, second_user_data)
    return {"Authorization": f"Bearer {token}"}
