"""Session tokens for the booking API and password hashing for stored users."""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session as DbSession

from .config import get_settings
from .models import Session, User

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
settings = get_settings()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def issue_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {"userId": user_id, "exp": datetime.utcnow() + lifetime}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def open_session(db: DbSession, user: User) -> str:
    """Issue a token for ``user`` and record it as an active session.

    Tokens are only honoured while their session row exists, so deleting the
    row revokes the token even before it expires.
    """

    token = issue_token(user.id)
    db.add(Session(user_id=user.id, token=token))
    db.commit()
    return token
