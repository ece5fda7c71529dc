# ============================================================================
# FILE: app/services/playlist_service.py
# ============================================================================
from typing import Any, List, Optional
from sqlalchemy.orm import Session
from app.db.models.playlist import Playlist
from app.schemas.playlist import PlaylistCreate, PlaylistResponse
import json
import logging

logger = logging.getLogger(__name__)

class PlaylistService:
    """Service layer for playlist operations"""

    @staticmethod
    def serialize_videos(videos: Optional[List[Any]]) -> Optional[str]:
        if videos is None:
            return None
        return json.dumps(videos)

    @staticmethod
    def parse_videos(raw: Optional[str]) -> List[Any]:
        if not raw:
            return []
        return json.loads(raw) or []

    def to_response(self, playlist: Playlist) -> PlaylistResponse:
        return PlaylistResponse(
            id=playlist.id,
            user_id=playlist.user_id,
            name=playlist.name,
            videos=self.parse_videos(playlist.videos),
            created_at=playlist.created_at,
        )
    
    def create_playlist(self, db: Session, user_id: int, playlist_data: PlaylistCreate) -> Playlist:
        """Save a new playlist for a user; re-saving a name creates another row"""
        try:
            playlist = Playlist(
                user_id=user_id,
                name=playlist_data.name,
                videos=self.serialize_videos(playlist_data.videos),
            )
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {user_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise
    
    def get_user_playlists(self, db: Session, user_id: int) -> List[PlaylistResponse]:
        """Get all playlists for a user with their video lists decoded"""
        playlists = db.query(Playlist).filter(Playlist.user_id == user_id).order_by(Playlist.id).all()
        return [self.to_response(p) for p in playlists]
    
    def delete_playlist(self, db: Session, playlist_id: int, user_id: int) -> int:
        """
        Delete a playlist only if it belongs to the user
        Returns the number of rows removed (0 or 1)
        """
        try:
            deleted = db.query(Playlist).filter(
                Playlist.id == playlist_id,
                Playlist.user_id == user_id
            ).delete(synchronize_session=False)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise
        if deleted:
            logger.info(f"Playlist deleted: {playlist_id}")
        return deleted

# Create singleton instance
playlist_service = PlaylistService()
