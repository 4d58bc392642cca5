import base64

import pytest

from app.auth import session_token
from app.config import Config

PIN = "4321"


@pytest.fixture
def pin(monkeypatch):
    monkeypatch.setattr(Config, "APP_PIN", PIN)
    return PIN


def basic(pin: str) -> dict:
    token = base64.b64encode(f"staff:{pin}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


class TestGate:
    """Requests without a session are turned away."""

    @pytest.mark.asyncio
    async def test_page_redirects_to_login_with_return_path(self, client, pin):
        response = await client.get("/products/new")

        assert response.status_code == 307
        assert response.headers["location"] == "/login?redirect=%2Fproducts%2Fnew"

    @pytest.mark.asyncio
    async def test_query_string_is_preserved(self, client, pin):
        response = await client.get("/?tab=1")

        assert response.headers["location"] == "/login?redirect=%2F%3Ftab%3D1"

    @pytest.mark.asyncio
    async def test_api_gets_401(self, client, pin):
        response = await client.get("/api/products")

        assert response.status_code == 401
        assert response.json() == {"detail": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_login_page_and_static_are_public(self, client, pin):
        assert (await client.get("/login")).status_code == 200
        assert (await client.get("/static/css/app.css")).status_code == 200

    @pytest.mark.asyncio
    async def test_session_cookie_passes(self, client, pin):
        client.cookies.set(Config.COOKIE_NAME, session_token(PIN))

        response = await client.get("/api/products")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_forged_cookie_rejected(self, client, pin):
        client.cookies.set(Config.COOKIE_NAME, "1")

        response = await client.get("/api/products")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_ascii_cookie_redirects_to_login(self, client, pin):
        response = await client.get("/", headers={"cookie": f"{Config.COOKIE_NAME}=\xe9".encode("latin-1")})

        assert response.status_code == 307
        assert response.headers["location"].startswith("/login")

    @pytest.mark.asyncio
    async def test_basic_auth_passes_and_sets_cookie(self, client, pin):
        response = await client.get("/api/products", headers=basic(PIN))

        assert response.status_code == 200
        assert f"{Config.COOKIE_NAME}={session_token(PIN)}" in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_basic_auth_with_wrong_pin(self, client, pin):
        response = await client.get("/api/products", headers=basic("0000"))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_no_pin_configured_lets_everything_through(self, client):
        response = await client.get("/api/products")

        assert response.status_code == 200


class TestLogin:
    """Tests for /api/auth/login and /api/auth/logout."""

    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, client, pin):
        response = await client.post("/api/auth/login", json={"pin": PIN})

        assert response.status_code == 200
        assert response.json() == {"message": "ok"}
        cookie = response.headers["set-cookie"]
        assert f"{Config.COOKIE_NAME}={session_token(PIN)}" in cookie
        assert "HttpOnly" in cookie
        assert "Max-Age=604800" in cookie
        assert "samesite=lax" in cookie.lower()

    @pytest.mark.asyncio
    async def test_wrong_pin_is_401(self, client, pin):
        response = await client.post("/api/auth/login", json={"pin": "0000"})

        assert response.status_code == 401
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_missing_pin_is_400(self, client, pin):
        response = await client.post("/api/auth/login", json={})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_pin_not_configured_is_500(self, client):
        response = await client.post("/api/auth/login", json={"pin": "1234"})

        assert response.status_code == 500
        assert response.json() == {"detail": "PIN not configured"}

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client, pin):
        client.cookies.set(Config.COOKIE_NAME, session_token(PIN))

        response = await client.post("/api/auth/logout")

        assert response.status_code == 200
        assert f'{Config.COOKIE_NAME}=""' in response.headers["set-cookie"]
