# ============================================================================
# FILE: app/core/session_store.py
# Server-side session storage: in-process map or Redis
# ============================================================================
from typing import Dict, Optional, Tuple
from app.config import settings
from app.exceptions import SessionStoreError
from app.schemas.session import SessionData
from pydantic import ValidationError
import redis
import threading
import time
import logging

logger = logging.getLogger(__name__)

class SessionStore:
    """Interface for session backends. A ttl of None means no server-side expiry."""

    def save(self, session_id: str, data: SessionData, ttl: Optional[int] = None) -> None:
        raise NotImplementedError

    def load(self, session_id: str) -> Optional[SessionData]:
        raise NotImplementedError

    def delete(self, session_id: str) -> None:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Process-local session map guarded by a lock"""

    # Expired entries are swept on save at most this often
    PURGE_INTERVAL_SECONDS = 60

    def __init__(self):
        self._sessions: Dict[str, Tuple[SessionData, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._last_purge = time.time()

    def save(self, session_id: str, data: SessionData, ttl: Optional[int] = None) -> None:
        now = time.time()
        expires_at = now + ttl if ttl else None
        with self._lock:
            if now - self._last_purge >= self.PURGE_INTERVAL_SECONDS:
                self._purge_locked(now)
            self._sessions[session_id] = (data, expires_at)

    def load(self, session_id: str) -> Optional[SessionData]:
        with self._lock:
            entry = self._sessions.get(session_id)
            if not entry:
                return None
            data, expires_at = entry
            if expires_at is not None and time.time() >= expires_at:
                del self._sessions[session_id]
                return None
            return data

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop every expired entry, returns how many were removed"""
        with self._lock:
            return self._purge_locked(time.time())

    def _purge_locked(self, now: float) -> int:
        expired = [
            sid for sid, (_, expires_at) in self._sessions.items()
            if expires_at is not None and now >= expires_at
        ]
        for sid in expired:
            del self._sessions[sid]
        self._last_purge = now
        if expired:
            logger.debug(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore(SessionStore):
    """Redis-backed sessions, expiry handled by Redis itself"""

    KEY_PREFIX = "session:"

    def __init__(self, redis_client=None, url: Optional[str] = None):
        self.redis_client = redis_client or redis.from_url(url or settings.REDIS_URL, decode_responses=True)

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    def save(self, session_id: str, data: SessionData, ttl: Optional[int] = None) -> None:
        payload = data.model_dump_json()
        try:
            if ttl:
                self.redis_client.setex(self._key(session_id), ttl, payload)
            else:
                self.redis_client.set(self._key(session_id), payload)
        except redis.RedisError as e:
            raise SessionStoreError("Failed to save session") from e

    def load(self, session_id: str) -> Optional[SessionData]:
        try:
            value = self.redis_client.get(self._key(session_id))
        except redis.RedisError as e:
            # An unreachable store means nobody is authenticated
            logger.error(f"Session load error: {e}")
            return None
        if not value:
            return None
        try:
            return SessionData.model_validate_json(value)
        except ValidationError as e:
            logger.error(f"Discarding unreadable session payload: {e}")
            return None

    def delete(self, session_id: str) -> None:
        try:
            self.redis_client.delete(self._key(session_id))
        except redis.RedisError as e:
            raise SessionStoreError("Failed to delete session") from e


def build_session_store(backend: Optional[str] = None) -> SessionStore:
    """Create the session store selected by SESSION_BACKEND"""
    backend = (backend or settings.SESSION_BACKEND).lower()
    if backend == "redis":
        logger.info("Using Redis session store")
        return RedisSessionStore()
    if backend != "memory":
        raise ValueError(f"Unknown session backend: {backend}")
    logger.info("Using in-memory session store")
    return InMemorySessionStore()
