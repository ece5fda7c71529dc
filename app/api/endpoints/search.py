# ============================================================================
# FILE: app/api/endpoints/search.py
# Server-side proxy to YouTube search, keeps the API key off the client
# ============================================================================
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from typing import Optional
from app.api.dependencies import require_session
from app.core.youtube_client import YouTubeClient, get_youtube_client
from app.schemas.search import SearchResponse
from app.schemas.session import SessionData
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/search", response_model=SearchResponse)
async def search_videos(
    q: Optional[str] = Query(None, description="Search query"),
    session: SessionData = Depends(require_session),
    client: YouTubeClient = Depends(get_youtube_client)
):
    """
    Search YouTube for videos in the music category
    
    Upstream errors and a missing API key both come back as an empty item list.
    Requires authentication
    """
    if not q:
        return {"items": []}
    
    logger.info(f"Search by user {session.user_id}: {q}")
    items = await run_in_threadpool(client.search_videos, q)
    return {"items": items or []}
