"""
Test the session-based authentication flow.
"""
from datetime import timedelta

from fastapi import status

from job_tracker_app.backend.api import auth as auth_api
from job_tracker_app.backend.config.settings import Settings
from job_tracker_app.backend.models.db import session as session_model
from job_tracker_app.backend.models.db.database import utcnow

COOKIE_NAME = "job_tracker.sid"


class TestRegistration:

    def test_register_success(self, test_client, test_user_data):
        response = test_client.post("/api/auth/register", json=test_user_data)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["user"]["username"] == "alice"
        assert data["user"]["id"]
        assert "password" not in data["user"]
        assert "passwordHash" not in data["user"]

    def test_register_sets_session_cookie(self, test_client, test_user_data):
        response = test_client.post("/api/auth/register", json=test_user_data)

        cookie_header = response.headers["set-cookie"]
        assert cookie_header.startswith(f"{COOKIE_NAME}=")
        assert "HttpOnly" in cookie_header
        assert "samesite=lax" in cookie_header.lower()
        assert "Max-Age=604800" in cookie_header
        assert "Secure" not in cookie_header

    def test_session_cookie_is_secure_in_production(self, test_client, test_user_data, monkeypatch):
        production = Settings(
            _env_file=None,
            environment="production",
            database_url="sqlite://",
            session_secret="p" * 40,
        )
        monkeypatch.setattr(auth_api, "get_settings", lambda: production)

        response = test_client.post("/api/auth/register", json=test_user_data)

        assert response.status_code == status.HTTP_201_CREATED
        cookie_header = response.headers["set-cookie"]
        assert cookie_header.startswith(f"{COOKIE_NAME}=")
        assert "Secure" in cookie_header
        assert "HttpOnly" in cookie_header

    def test_register_starts_session(self, test_client, test_user_data):
        test_client.post("/api/auth/register", json=test_user_data)

        response = test_client.get("/api/auth/me")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["username"] == "alice"

    def test_register_duplicate_username(self, test_client, test_user_data):
        first = test_client.post("/api/auth/register", json=test_user_data)
        assert first.status_code == status.HTTP_201_CREATED

        second = test_client.post(
            "/api/auth/register",
            json={"username": "alice", "password": "different1"},
        )
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.json() == {"message": "Username already exists"}

        # The original account still logs in with its own password
        login = test_client.post("/api/auth/login", json=test_user_data)
        assert login.status_code == status.HTTP_200_OK
        assert login.json()["user"]["id"] == first.json()["user"]["id"]

    def test_register_username_too_short(self, test_client):
        response = test_client.post("/api/auth/register", json={"username": "al", "password": "secret1"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["message"] == "Invalid input"
        assert any(error["field"] == "username" for error in body["errors"])

    def test_register_username_too_long(self, test_client):
        response = test_client.post("/api/auth/register", json={"username": "a" * 31, "password": "secret1"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_password_too_short(self, test_client):
        response = test_client.post("/api/auth/register", json={"username": "alice", "password": "12345"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert any(error["field"] == "password" for error in response.json()["errors"])

    def test_register_missing_fields(self, test_client):
        response = test_client.post("/api/auth/register", json={})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"username", "password"}


class TestLogin:

    def test_login_success(self, test_client, test_user, test_user_data):
        response = test_client.post("/api/auth/login", json=test_user_data)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"] == {"id": test_user.id, "username": "alice"}
        assert COOKIE_NAME in response.cookies

    def test_wrong_password_and_unknown_user_look_the_same(self, test_client, test_user):
        wrong_password = test_client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
        unknown_user = test_client.post("/api/auth/login", json={"username": "nobody", "password": "secret1"})

        assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown_user.status_code == status.HTTP_401_UNAUTHORIZED
        assert wrong_password.json() == unknown_user.json() == {"message": "Invalid credentials"}

    def test_failed_login_sets_no_cookie(self, test_client, test_user):
        response = test_client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
        assert "set-cookie" not in response.headers

    def test_login_missing_password(self, test_client):
        response = test_client.post("/api/auth/login", json={"username": "alice"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSessionGate:

    def test_me_without_session(self, test_client):
        response = test_client.get("/api/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Unauthorized"}

    def test_me_with_forged_cookie(self, test_client):
        test_client.cookies.set(COOKIE_NAME, "not-a-real-session")
        response = test_client.get("/api/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_session_identity(self, auth_client):
        response = auth_client.get("/api/auth/me")

        assert response.status_code == status.HTTP_200_OK
        user = response.json()["user"]
        assert user["username"] == "alice"
        assert set(user) == {"id", "username"}

    def test_logout_destroys_session(self, auth_client):
        token = auth_client.cookies.get(COOKIE_NAME)

        response = auth_client.post("/api/auth/logout")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Logged out successfully"}
        assert f"{COOKIE_NAME}=" in response.headers["set-cookie"]

        # Replaying the old cookie must not work either
        auth_client.cookies.set(COOKIE_NAME, token)
        assert auth_client.get("/api/auth/me").status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_requires_session(self, test_client):
        response = test_client.post("/api/auth/logout")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_session_rejected(self, auth_client, test_db_session):
        test_db_session.query(session_model.Session).update(
            {session_model.Session.expires_at: utcnow() - timedelta(seconds=1)}
        )
        test_db_session.commit()

        response = auth_client.get("/api/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert test_db_session.query(session_model.Session).count() == 0

    def test_sessions_are_independent(self, auth_client, other_auth_client):
        assert auth_client.get("/api/auth/me").json()["user"]["username"] == "alice"
        assert other_auth_client.get("/api/auth/me").json()["user"]["username"] == "bob"

        auth_client.post("/api/auth/logout")
        assert other_auth_client.get("/api/auth/me").status_code == status.HTTP_200_OK
