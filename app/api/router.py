# ============================================================================
# FILE: app/api/router.py
# ============================================================================
from fastapi import APIRouter
from app.api.endpoints import auth, playlist, search

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(playlist.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(search.router, tags=["search"])
