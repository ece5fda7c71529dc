# ============================================================================
# FILE: app/schemas/session.py
# ============================================================================
from pydantic import BaseModel

class SessionData(BaseModel):
    """Server-side state attached to an authenticated session"""
    user_id: int
    username: str
