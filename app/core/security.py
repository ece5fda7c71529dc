# ============================================================================
# FILE: app/core/security.py
# Password hashing and cookie token signing
# ============================================================================
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from app.config import settings
import bcrypt
import logging

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72

def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a plaintext password with a fresh bcrypt salt"""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash
    Returns False on mismatch or when the stored hash is malformed
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False

def create_signed_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign a payload for use as a cookie value"""
    to_encode = data.copy()
    if expires_delta:
        to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_signed_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify signature and expiry; None when the token cannot be trusted"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
