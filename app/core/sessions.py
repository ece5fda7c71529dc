# ============================================================================
# FILE: app/core/sessions.py
# Issues, resolves and destroys cookie-referenced sessions
# ============================================================================
from datetime import timedelta
from typing import Optional
from fastapi import Response
from app.config import settings
from app.core.security import create_signed_token, decode_signed_token
from app.core.session_store import SessionStore
from app.schemas.session import SessionData
import secrets
import logging

logger = logging.getLogger(__name__)

class SessionManager:
    """
    Maps an opaque cookie to server-side SessionData.

    The cookie only carries a signed session id; user data stays in the store,
    so deleting the store entry invalidates the cookie immediately.
    """

    def __init__(
        self,
        store: SessionStore,
        cookie_name: Optional[str] = None,
        max_age: Optional[int] = None,
        secure: Optional[bool] = None,
    ):
        self.store = store
        self.cookie_name = cookie_name or settings.SESSION_COOKIE_NAME
        self.max_age = settings.SESSION_MAX_AGE_SECONDS if max_age is None else max_age
        self.secure = settings.SESSION_COOKIE_SECURE if secure is None else secure

    @property
    def ttl(self) -> Optional[int]:
        return self.max_age or None

    def create(self, response: Response, user_id: int, username: str) -> SessionData:
        """Start a session for a user and attach the cookie to the response"""
        session_id = secrets.token_urlsafe(32)
        data = SessionData(user_id=user_id, username=username)
        self.store.save(session_id, data, self.ttl)

        expires = timedelta(seconds=self.ttl) if self.ttl else None
        token = create_signed_token({"sid": session_id}, expires_delta=expires)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.ttl,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.secure,
        )
        logger.info(f"Session started for user {user_id}")
        return data

    def _session_id(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        payload = decode_signed_token(token)
        if not payload:
            return None
        return payload.get("sid")

    def resolve(self, token: Optional[str]) -> Optional[SessionData]:
        """Return the session behind a cookie value, or None if unauthenticated"""
        session_id = self._session_id(token)
        if not session_id:
            return None
        return self.store.load(session_id)

    def destroy(self, token: Optional[str], response: Response) -> None:
        """Invalidate the server-side entry and clear the cookie"""
        session_id = self._session_id(token)
        if session_id:
            self.store.delete(session_id)
        response.delete_cookie(key=self.cookie_name, path="/", httponly=True, samesite="lax", secure=self.secure)
