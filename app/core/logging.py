# ============================================================================
# FILE: app/core/logging.py
# ============================================================================
import logging
from typing import Optional
from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the whole process"""
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    
    # The discovery cache warns on every client build when oauth2client is absent
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
