import logging
from dataclasses import dataclass
import uuid

import jwt
from fastapi import Request

from motivodo.core.config import settings
from motivodo.core.errors import Unauthenticated
from motivodo.core.security import decode_session_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, handed explicitly to every protected handler."""

    user_id: uuid.UUID


def get_auth_context(request: Request) -> AuthContext:
    token = request.cookies.get(settings.TOKEN_COOKIE)
    if not token:
        raise Unauthenticated("Authentication required")

    try:
        user_id = decode_session_token(token)
    except jwt.PyJWTError as exc:
        logger.warning("Rejected session token: %s", exc)
        raise Unauthenticated("Invalid or expired token")

    return AuthContext(user_id=user_id)
