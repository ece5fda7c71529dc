# ============================================================================
# FILE: app/schemas/user.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional

class UserCredentials(BaseModel):
    """Schema for register and login requests (presence is checked by the handlers)"""
    username: Optional[str] = None
    password: Optional[str] = None

class AuthResponse(BaseModel):
    """Schema for a successful register or login"""
    success: bool = True
    username: str

class CurrentUserResponse(BaseModel):
    """Schema for the current session user"""
    username: str

class SuccessResponse(BaseModel):
    success: bool = True
