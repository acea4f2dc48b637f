from datetime import datetime, timedelta, timezone
from typing import Optional
import uuid

import jwt
from fastapi import Response
from passlib.context import CryptContext

from .config import settings

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# JWT session token functions
def create_session_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=settings.TOKEN_EXPIRE_DAYS)

    to_encode = {"userId": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.SESSION_SECRET, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> uuid.UUID:
    """
    Return the user id carried by a session token.

    Raises jwt.PyJWTError when the signature is wrong, the token has
    expired (or carries no expiry), or the payload has no usable ``userId``.
    """
    payload = jwt.decode(
        token,
        settings.SESSION_SECRET,
        algorithms=[settings.ALGORITHM],
        options={"require": ["exp"]},
    )
    user_id = payload.get("userId")
    if not user_id:
        raise jwt.InvalidTokenError("Token has no userId")
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        raise jwt.InvalidTokenError("Malformed userId")


# Session cookie helpers
def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.TOKEN_COOKIE,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
