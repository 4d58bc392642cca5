"""
Shared-PIN auth gate.

A request passes when it carries the session cookie or HTTP basic credentials
whose password is the configured PIN. With no PIN configured every request
passes.
"""
import base64
import binascii
import hashlib
import hmac
import logging
from urllib.parse import urlencode

from fastapi import Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import Config

logger = logging.getLogger(__name__)

PUBLIC_PREFIXES = ("/api/auth/login", "/login", "/static", "/favicon.ico", "/api/health")


def session_token(pin: str) -> str:
    """Cookie value for a PIN. Changing the PIN invalidates existing sessions."""
    return hmac.new(pin.encode(), b"inventory-session", hashlib.sha256).hexdigest()


def pin_matches(candidate: str | None, pin: str) -> bool:
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode(), pin.encode())


def has_valid_session(cookie: str | None, pin: str) -> bool:
    if not cookie:
        return False
    return hmac.compare_digest(cookie.encode(), session_token(pin).encode())


def pin_from_basic_auth(header: str | None) -> str | None:
    """Password half of a ``Basic`` authorization header, if any."""
    if not header or not header.startswith("Basic "):
        return None
    try:
        decoded = base64.b64decode(header[len("Basic "):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    _, sep, password = decoded.partition(":")
    return password if sep else None


def set_session_cookie(response: Response, pin: str):
    response.set_cookie(
        Config.COOKIE_NAME,
        session_token(pin),
        max_age=Config.SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=Config.COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(
        Config.COOKIE_NAME,
        path="/",
        httponly=True,
        secure=Config.COOKIE_SECURE,
        samesite="lax",
    )


def safe_redirect_target(target: str | None) -> str:
    """Only same-site absolute paths; anything else goes to the dashboard."""
    # Browsers drop tabs and newlines when parsing URLs, so "/\t/host" becomes "//host"
    if target and any(ord(ch) < 0x20 or ord(ch) == 0x7f for ch in target):
        return "/"
    if not target or not target.startswith("/") or target.startswith("//") or "\\" in target:
        return "/"
    return target


class PinAuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        pin = Config.APP_PIN
        if not pin:
            return await call_next(request)

        path = request.url.path
        if path.startswith(PUBLIC_PREFIXES):
            return await call_next(request)

        if has_valid_session(request.cookies.get(Config.COOKIE_NAME), pin):
            return await call_next(request)

        if pin_matches(pin_from_basic_auth(request.headers.get("authorization")), pin):
            logger.info(f"Basic auth accepted for {path}; issuing session cookie")
            response = await call_next(request)
            set_session_cookie(response, pin)
            return response

        if path.startswith("/api/"):
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

        target = path
        if request.url.query:
            target = f"{path}?{request.url.query}"
        return RedirectResponse(f"/login?{urlencode({'redirect': target})}", status_code=307)
