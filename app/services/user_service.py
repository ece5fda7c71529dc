# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.db.models.user import User
from app.core.security import get_password_hash, verify_password
from app.exceptions import UsernameTakenError
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""
    
    def create_user(self, db: Session, username: str, password: str) -> User:
        """
        Create a new user account
        Raises UsernameTakenError when the unique constraint rejects the username
        """
        hashed_password = get_password_hash(password)
        user = User(username=username, hashed_password=hashed_password)
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Registration rejected, username taken: {username}")
            raise UsernameTakenError(username) from e
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise
        logger.info(f"User created: {user.username}")
        return user
    
    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username (case-sensitive)"""
        return db.query(User).filter(User.username == username).first()
    
    def authenticate_user(self, db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with username and password"""
        user = self.get_user_by_username(db, username)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

# Create singleton instance
user_service = UserService()
