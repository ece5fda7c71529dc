# ============================================================================
# FILE: app/schemas/search.py
# ============================================================================
from pydantic import BaseModel
from typing import Any, Dict, List

class SearchResponse(BaseModel):
    """YouTube search items passed through unchanged"""
    items: List[Dict[str, Any]] = []
