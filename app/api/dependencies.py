# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, Request, status
from app.core.sessions import SessionManager
from app.schemas.session import SessionData
from typing import Optional

def get_session_manager(request: Request) -> SessionManager:
    """Session manager configured on the application at startup"""
    return request.app.state.session_manager

def get_session_token(
    request: Request,
    manager: SessionManager = Depends(get_session_manager)
) -> Optional[str]:
    """Raw session cookie value, if the client sent one"""
    return request.cookies.get(manager.cookie_name)

def get_optional_session(
    token: Optional[str] = Depends(get_session_token),
    manager: SessionManager = Depends(get_session_manager)
) -> Optional[SessionData]:
    """
    Get the current session from the cookie
    Returns None if no cookie or invalid cookie (allows anonymous access)
    """
    return manager.resolve(token)

def require_session(
    session: Optional[SessionData] = Depends(get_optional_session)
) -> SessionData:
    """
    Require authenticated session (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session
