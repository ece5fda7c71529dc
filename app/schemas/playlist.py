
# ============================================================================
# FILE: app/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel
from typing import Any, List, Optional
from datetime import datetime

class PlaylistCreate(BaseModel):
    """Schema for saving a playlist; videos are stored exactly as sent"""
    name: str
    videos: Optional[List[Any]] = None

class PlaylistCreated(BaseModel):
    success: bool = True
    id: int

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: int
    user_id: int
    name: str
    videos: List[Any] = []
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
