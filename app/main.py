# ============================================================================
# FILE: app/main.py
# ============================================================================
from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
from app.api.router import api_router
from app.api.dependencies import get_optional_session
from app.core.logging import setup_logging
from app.core.session_store import build_session_store
from app.core.sessions import SessionManager
from app.schemas.session import SessionData
from app.config import settings
import logging
import os

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Accounts, saved playlists and YouTube search for the music player",
    version="1.0.0"
)

# Server-side sessions
app.state.session_manager = SessionManager(build_session_store())

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# All errors go out as {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})

# Include API router
app.include_router(api_router, prefix="/api")

# Serve static files (if frontend directory exists)
if os.path.isdir(settings.FRONTEND_DIR):
    app.mount("/static", StaticFiles(directory=settings.FRONTEND_DIR), name="static")

@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    logger.info(f"Starting {settings.APP_NAME} server")
    from app.db.session import init_db
    init_db()

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME} server")

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.get("/")
async def serve_frontend(session: Optional[SessionData] = Depends(get_optional_session)):
    """Serve the player for logged-in users, the login page otherwise"""
    page = "index.html" if session else "login.html"
    frontend_file = os.path.join(settings.FRONTEND_DIR, page)
    if os.path.exists(frontend_file):
        return FileResponse(frontend_file)
    return {"message": f"{settings.APP_NAME} API", "page": page, "docs": "/docs"}

def run():
    """Start the server on HOST:PORT"""
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
