# ============================================================================
# FILE: app/exceptions.py
# Domain errors raised by services and translated into HTTP responses by handlers
# ============================================================================
from typing import Any, Dict, Optional


class MusicPlayerError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str = "An unexpected error occurred", context: Optional[Dict[str, Any]] = None):
        self.message = message
        # Logged only, never returned to the client
        self.context = context or {}
        super().__init__(self.message)


class UsernameTakenError(MusicPlayerError):
    """Raised when registering a username that already exists"""

    def __init__(self, username: str):
        super().__init__("Username already exists", context={"username": username})


class SessionStoreError(MusicPlayerError):
    """Raised when the session backend cannot read, write or delete an entry"""
