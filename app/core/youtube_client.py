# ============================================================================
# FILE: app/core/youtube_client.py
# YouTube Data API v3 client used by the search proxy
# ============================================================================
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Dict, List, Optional
from app.config import settings
import logging

logger = logging.getLogger(__name__)


class YouTubeClient:
    """
    YouTube Data API v3 client for video search
    The API key stays on the server; callers only see result items
    """

    def __init__(self, api_key: Optional[str] = None):
        """Initialize YouTube API client"""
        self.api_key = settings.YOUTUBE_API_KEY if api_key is None else api_key
        self.service_name = settings.YOUTUBE_API_SERVICE_NAME
        self.api_version = settings.YOUTUBE_API_VERSION
        self.category_id = settings.YOUTUBE_SEARCH_CATEGORY_ID
        self.max_results = settings.YOUTUBE_SEARCH_MAX_RESULTS
        self.youtube = None

        if self.api_key:
            try:
                self.youtube = build(
                    self.service_name,
                    self.api_version,
                    developerKey=self.api_key
                )
                logger.info("YouTube API client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize YouTube API client: {e}")
        else:
            logger.warning("YouTube API key not configured, search will return no results")

    def search_videos(self, query: str) -> Optional[List[Dict]]:
        """
        Search videos in the configured category

        Args:
            query: Free-text search query

        Returns:
            Raw search result items, or None if the client is unavailable or the call failed
        """
        if not self.youtube:
            logger.error("YouTube API client not initialized")
            return None

        try:
            request = self.youtube.search().list(
                part="snippet",
                q=query,
                type="video",
                videoCategoryId=self.category_id,
                maxResults=self.max_results
            )
            response = request.execute()
            items = response.get('items', [])
            logger.info(f"YouTube search returned {len(items)} items")
            return items

        except HttpError as e:
            logger.error(f"YouTube API error during search: {e}")
            return None
        except Exception as e:
            logger.error(f"Error searching videos: {e}")
            return None


# Singleton instance
youtube_client = YouTubeClient()


def get_youtube_client() -> YouTubeClient:
    """FastAPI dependency for the shared client"""
    return youtube_client
