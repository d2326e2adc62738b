# therapy_scheduler/core/jwt.py

from datetime import datetime, timedelta
from jose import jwt
from therapy_scheduler.core.config import Settings


def create_jwt_token(data: dict, settings: Settings, expires_delta: timedelta = timedelta(hours=2)) -> str:
    settings.require("SECRET_KEY")
    to_encode = data.copy()
    expire = datetime.utcnow() + expires_delta
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def decode_jwt_token(token: str, settings: Settings) -> dict:
    """Raises jose.JWTError on a bad signature or an expired token."""
    settings.require("SECRET_KEY")
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
