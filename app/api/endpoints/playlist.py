# ============================================================================
# FILE: app/api/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_session
from app.schemas.playlist import PlaylistCreate, PlaylistCreated, PlaylistResponse
from app.schemas.session import SessionData
from app.schemas.user import SuccessResponse
from app.services.playlist_service import playlist_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[PlaylistResponse])
def get_my_playlists(
    db: Session = Depends(get_db),
    session: SessionData = Depends(require_session)
):
    """
    Get all playlists for the current user
    Requires authentication
    """
    return playlist_service.get_user_playlists(db, session.user_id)

@router.post("", response_model=PlaylistCreated)
def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    session: SessionData = Depends(require_session)
):
    """
    Save a playlist
    Requires authentication
    """
    try:
        playlist = playlist_service.create_playlist(db, session.user_id, playlist_data)
    except Exception as e:
        logger.error(f"Create playlist error: {e}")
        raise HTTPException(status_code=500, detail="Server error")
    return {"success": True, "id": playlist.id}

@router.delete("/{playlist_id}", response_model=SuccessResponse)
def delete_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    session: SessionData = Depends(require_session)
):
    """
    Delete a playlist
    Only the owner's rows match; succeeds whether or not anything was deleted
    """
    try:
        numeric_id = int(playlist_id)
    except ValueError:
        numeric_id = None
    if numeric_id is None or not -2**63 <= numeric_id < 2**63:
        # No playlist can have this id, nothing to delete
        return {"success": True}
    
    try:
        playlist_service.delete_playlist(db, numeric_id, session.user_id)
    except Exception as e:
        logger.error(f"Delete playlist error: {e}")
        raise HTTPException(status_code=500, detail="Server error")
    return {"success": True}
