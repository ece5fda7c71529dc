# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List
import os

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Music Player"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database
    DATABASE_URL: str = "sqlite:///./music.db"

    # Sessions
    SECRET_KEY: str = "change-this-secret-key-in-production"
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "music_session"
    SESSION_MAX_AGE_SECONDS: int = 24 * 60 * 60  # 0 = until browser close
    SESSION_COOKIE_SECURE: bool = False  # set to True behind HTTPS
    SESSION_BACKEND: str = "memory"  # "memory" or "redis"
    REDIS_URL: str = "redis://localhost:6379/0"

    # Credentials
    BCRYPT_ROUNDS: int = 10
    MIN_PASSWORD_LENGTH: int = 6

    # YouTube Data API v3 (no default key, must come from the environment)
    YOUTUBE_API_KEY: str = ""
    YOUTUBE_API_SERVICE_NAME: str = "youtube"
    YOUTUBE_API_VERSION: str = "v3"
    YOUTUBE_SEARCH_CATEGORY_ID: str = "10"  # Music
    YOUTUBE_SEARCH_MAX_RESULTS: int = 10

    # Frontend
    FRONTEND_DIR: str = os.path.join(BASE_DIR, "frontend")

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
