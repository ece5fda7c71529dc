# ============================================================================
# FILE: app/api/endpoints/auth.py
# Registration, login, logout and current user
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.api.dependencies import get_session_manager, get_session_token, require_session
from app.core.sessions import SessionManager
from app.schemas.session import SessionData
from app.schemas.user import UserCredentials, AuthResponse, CurrentUserResponse, SuccessResponse
from app.services.user_service import user_service
from app.exceptions import UsernameTakenError, SessionStoreError
from app.config import settings
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_LOGIN = "Invalid username or password"

@router.post("/register", response_model=AuthResponse)
def register(
    response: Response,
    credentials: Optional[UserCredentials] = None,
    db: Session = Depends(get_db),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Register a new user account and log it in
    """
    credentials = credentials or UserCredentials()
    username, password = credentials.username, credentials.password
    if not username or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password required"
        )
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )
    
    try:
        user = user_service.create_user(db, username, password)
    except UsernameTakenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(status_code=500, detail="Server error")
    
    # The account is committed at this point; a failure here only loses the auto-login
    try:
        manager.create(response, user.id, user.username)
    except Exception as e:
        logger.error(f"User {user.username} was created but no session could be started: {e}")
        raise HTTPException(
            status_code=500,
            detail="Account created but login failed, please log in"
        )
    
    return {"success": True, "username": user.username}

@router.post("/login", response_model=AuthResponse)
def login(
    response: Response,
    credentials: Optional[UserCredentials] = None,
    db: Session = Depends(get_db),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Login with username and password
    Unknown user and wrong password get the same error
    """
    credentials = credentials or UserCredentials()
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_LOGIN)
    
    try:
        user = user_service.authenticate_user(db, credentials.username, credentials.password)
        if user:
            manager.create(response, user.id, user.username)
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(status_code=500, detail="Server error")
    
    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_LOGIN)
    
    logger.info(f"User logged in: {user.username}")
    return {"success": True, "username": user.username}

@router.post("/logout", response_model=SuccessResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Destroy the current session and clear the cookie
    """
    try:
        manager.destroy(token, response)
    except SessionStoreError as e:
        logger.error(f"Logout error: {e}")
        raise HTTPException(status_code=500, detail="Logout failed")
    return {"success": True}

@router.get("/user", response_model=CurrentUserResponse)
async def get_current_user_info(
    session: SessionData = Depends(require_session)
):
    """
    Get current username from the session
    Requires authentication
    """
    return {"username": session.username}
