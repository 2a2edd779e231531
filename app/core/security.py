from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
import bcrypt

from app.core.config import get_settings
from app.exceptions import AuthenticationException

settings = get_settings()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash using bcrypt directly"""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash password using bcrypt directly"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def create_access_token(pilot_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token for a pilot"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode = {"sub": str(pilot_id), "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Returns:
        The pilot id carried by the token

    Raises:
        AuthenticationException: invalid, expired or subject-less token
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationException(f"Invalid token: {str(e)}")

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationException("Token has no subject")
    try:
        return int(subject)
    except ValueError:
        raise AuthenticationException("Token subject is not a pilot id")
