"""
Registration, login, logout and the authorization gate, end to end over HTTP.
"""

import logging

import pytest
from jose import jwt

from app.db.models.user import User
from app.exceptions import SessionStoreError
from app.services.user_service import user_service

pytestmark = pytest.mark.asyncio

COOKIE = "music_session"


async def register(client, username="alice", password="secret1"):
    return await client.post("/api/register", json={"username": username, "password": password})


class TestRegister:
    """POST /api/register"""

    async def test_register_returns_username_and_logs_in(self, client):
        response = await register(client)

        assert response.status_code == 200
        assert response.json() == {"success": True, "username": "alice"}
        assert client.cookies.get(COOKIE)

        me = await client.get("/api/user")
        assert me.status_code == 200
        assert me.json() == {"username": "alice"}

    async def test_cookie_is_http_only(self, client):
        response = await register(client)

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "max-age=86400" in set_cookie

    async def test_duplicate_username_rejected_without_new_row(self, make_client, db_session):
        async with make_client() as first, make_client() as second:
            assert (await register(first)).status_code == 200
            response = await register(second, password="another1")

        assert response.status_code == 400
        assert response.json() == {"error": "Username already exists"}
        assert db_session.query(User).filter(User.username == "alice").count() == 1

    async def test_usernames_are_case_sensitive(self, make_client):
        async with make_client() as first, make_client() as second:
            assert (await register(first, "alice")).status_code == 200
            assert (await register(second, "Alice")).status_code == 200

    @pytest.mark.parametrize("body", [
        {"username": "alice"},
        {"password": "secret1"},
        {"username": "", "password": "secret1"},
        {},
    ])
    async def test_missing_fields(self, client, body):
        response = await client.post("/api/register", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Username and password required"}

    async def test_no_body(self, client):
        response = await client.post("/api/register")

        assert response.status_code == 400
        assert response.json() == {"error": "Username and password required"}

    async def test_short_password(self, client, db_session):
        response = await register(client, password="12345")

        assert response.status_code == 400
        assert response.json() == {"error": "Password must be at least 6 characters"}
        assert db_session.query(User).count() == 0

    async def test_wrong_types_are_bad_requests(self, client):
        response = await client.post("/api/register", json={"username": 123, "password": "secret1"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request"}

    async def test_unexpected_failure_is_server_error(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(user_service, "create_user", boom)
        response = await register(client)

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}
        assert client.cookies.get(COOKIE) is None

    async def test_session_failure_after_account_creation(self, client, session_store, monkeypatch, caplog):
        def failing_save(session_id, data, ttl=None):
            raise SessionStoreError("Failed to save session")

        monkeypatch.setattr(session_store, "save", failing_save)
        with caplog.at_level(logging.ERROR, logger="app.api.endpoints.auth"):
            response = await register(client)

        assert response.status_code == 500
        assert response.json() == {"error": "Account created but login failed, please log in"}
        assert "alice was created but no session could be started" in caplog.text
        assert client.cookies.get(COOKIE) is None

        monkeypatch.undo()
        login = await client.post("/api/login", json={"username": "alice", "password": "secret1"})
        assert login.json() == {"success": True, "username": "alice"}

    async def test_password_is_not_stored_in_plaintext(self, client, db_session):
        await register(client)

        stored = db_session.query(User).filter(User.username == "alice").one()
        assert stored.hashed_password != "secret1"
        assert stored.hashed_password.startswith("$2")
        assert stored.created_at is not None


class TestLogin:
    """POST /api/login"""

    async def test_login_success(self, make_client):
        async with make_client() as setup:
            await register(setup)

        async with make_client() as client:
            response = await client.post("/api/login", json={"username": "alice", "password": "secret1"})
            assert response.status_code == 200
            assert response.json() == {"success": True, "username": "alice"}

            me = await client.get("/api/user")
            assert me.json() == {"username": "alice"}

    async def test_wrong_password_and_unknown_user_look_the_same(self, make_client):
        async with make_client() as setup:
            await register(setup)

        async with make_client() as client:
            wrong_password = await client.post("/api/login", json={"username": "alice", "password": "wrong-pass"})
            unknown_user = await client.post("/api/login", json={"username": "bob", "password": "secret1"})

            assert wrong_password.status_code == unknown_user.status_code == 400
            assert wrong_password.json() == unknown_user.json() == {"error": "Invalid username or password"}
            assert client.cookies.get(COOKIE) is None
            assert (await client.get("/api/user")).status_code == 401

    async def test_missing_fields_are_invalid_credentials(self, client):
        response = await client.post("/api/login", json={"username": "alice"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid username or password"}


class TestLogout:
    """POST /api/logout"""

    async def test_logout_invalidates_session(self, client):
        await register(client)
        assert (await client.get("/api/user")).status_code == 200

        response = await client.post("/api/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.cookies.get(COOKIE) is None
        me = await client.get("/api/user")
        assert me.status_code == 401
        assert me.json() == {"error": "Not authenticated"}

    async def test_replayed_cookie_rejected_after_logout(self, client, make_client, session_store):
        await register(client)
        token = client.cookies.get(COOKIE)
        assert len(session_store) == 1

        await client.post("/api/logout")
        assert len(session_store) == 0

        async with make_client() as other:
            response = await other.get("/api/playlists", headers={"Cookie": f"{COOKIE}={token}"})
        assert response.status_code == 401

    async def test_logout_without_session(self, client):
        response = await client.post("/api/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True}

    async def test_store_failure_reports_logout_failed(self, client, session_store, monkeypatch):
        await register(client)

        def failing_delete(session_id):
            raise SessionStoreError("Failed to delete session")

        monkeypatch.setattr(session_store, "delete", failing_delete)
        response = await client.post("/api/logout")

        assert response.status_code == 500
        assert response.json() == {"error": "Logout failed"}


class TestAuthorizationGate:
    """Protected endpoints without a valid session"""

    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/user"),
        ("GET", "/api/playlists"),
        ("POST", "/api/playlists"),
        ("DELETE", "/api/playlists/1"),
        ("GET", "/api/search?q=test"),
    ])
    async def test_requires_session(self, client, method, path):
        response = await client.request(method, path, json={"name": "x", "videos": []})

        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    async def test_cookie_signed_with_another_key_is_unauthenticated(self, client, make_client):
        await register(client)
        claims = jwt.get_unverified_claims(client.cookies.get(COOKIE))
        forged = jwt.encode(claims, "some-other-key", algorithm="HS256")

        async with make_client() as other:
            response = await other.get("/api/user", headers={"Cookie": f"{COOKIE}={forged}"})
        assert response.status_code == 401

    async def test_garbage_cookie_is_unauthenticated(self, client):
        response = await client.get("/api/user", headers={"Cookie": f"{COOKIE}=not-a-token"})

        assert response.status_code == 401


class TestLandingPage:
    """GET /"""

    async def test_login_page_when_anonymous(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "auth-form" in response.text

    async def test_player_page_when_logged_in(self, client):
        await register(client)
        response = await client.get("/")

        assert response.status_code == 200
        assert "Saved playlists" in response.text

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.json() == {"status": "healthy"}
