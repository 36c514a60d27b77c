from notes_api.ownership import DENIAL_MESSAGE
from notes_api.security import TokenIssuer
from notes_database.models import Account


def test_auth_health_check(auth_client):
    assert auth_client.get("/").json()["message"] == "Healthy"


def test_signup_and_signin(auth_client, user_data, settings):
    r = auth_client.post("/auth/signup", json=user_data)
    assert r.status_code == 201
    token = r.headers["Authorization"]
    assert r.json() == {"access_token": token, "token_type": "bearer"}

    issuer = TokenIssuer(settings.secret_key)
    claims = issuer.verify(token)
    assert claims == {"username": "alice"}

    # Duplicate username
    r2 = auth_client.post("/auth/signup", json=user_data)
    assert r2.status_code == 409

    # Sign in with correct credentials
    r3 = auth_client.post("/auth/signin", json={
        "username": user_data["username"], "password": user_data["password"]
    })
    assert r3.status_code == 200
    assert issuer.verify(r3.headers["Authorization"])["username"] == "alice"

    # Wrong password
    r4 = auth_client.post("/auth/signin", json={"username": "alice", "password": "wrongpw"})
    assert r4.status_code == 401
    assert "Authorization" not in r4.headers

    # Unknown user
    r5 = auth_client.post("/auth/signin", json={"username": "somebody", "password": "pw"})
    assert r5.status_code == 401


def test_password_is_not_stored_in_plaintext(auth_client, user_data, db_session):
    auth_client.post("/auth/signup", json=user_data)
    account = db_session.query(Account).filter(Account.username == "alice").one()
    assert account.hashed_password != user_data["password"]
    assert account.email == "alice@example.com"
    assert account.date_of_birth == "1990-01-01"


def test_signup_accepts_legacy_date_of_birth_key(auth_client, db_session):
    r = auth_client.post("/auth/signup", json={
        "username": "carol", "password": "pw", "email": "carol@example.com", "DateOfBirth": "2000-02-02"
    })
    assert r.status_code == 201
    account = db_session.query(Account).filter(Account.username == "carol").one()
    assert account.date_of_birth == "2000-02-02"


def test_signup_invalid(auth_client):
    r = auth_client.post("/auth/signup", json={"username": "dave", "password": "pw", "email": "not-an-email"})
    assert r.status_code == 400
    r2 = auth_client.post("/auth/signup", json={"username": "dave"})
    assert r2.status_code == 400


def test_delete_account(auth_client, auth_header, db_session):
    r = auth_client.request("DELETE", "/auth/delete", json={"username": "alice"}, headers=auth_header)
    assert r.status_code == 200
    assert r.text == "Successfully deleted account!"
    assert db_session.query(Account).filter(Account.username == "alice").first() is None

    r2 = auth_client.post("/auth/signin", json={"username": "alice", "password": "alicepassword123"})
    assert r2.status_code == 401


def test_delete_account_short_path(auth_client, auth_header, db_session):
    r = auth_client.request("DELETE", "/delete", json={"username": "alice"}, headers=auth_header)
    assert r.status_code == 200
    assert db_session.query(Account).count() == 0


def test_delete_account_requires_token(auth_client, user_data):
    auth_client.post("/auth/signup", json=user_data)
    r = auth_client.request("DELETE", "/auth/delete", json={"username": "alice"})
    assert r.status_code == 401


def test_delete_other_account_denied(auth_client, auth_header, second_auth_header, db_session):
    r = auth_client.request("DELETE", "/auth/delete", json={"username": "alice"}, headers=second_auth_header)
    assert r.status_code == 403
    assert r.text == DENIAL_MESSAGE
    assert db_session.query(Account).filter(Account.username == "alice").first() is not None


def test_token_from_auth_service_unlocks_notes(auth_client, client, user_data):
    token = auth_client.post("/auth/signup", json=user_data).headers["Authorization"]
    r = client.post("/new", json={"title": "First", "user": "alice"}, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 201
