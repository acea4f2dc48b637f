import logging
from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import IntegrityError

from motivodo.services.storage import DatabaseStorage, get_storage
from motivodo.models.user import User
from motivodo.schemas.user import UserCreate, UserRead, UserLogin, Message
from motivodo.core.errors import Conflict, NotFound, Unauthenticated
from motivodo.core.security import (
    clear_session_cookie,
    create_session_token,
    get_password_hash,
    set_session_cookie,
    verify_password,
)
from ...deps import AuthContext, get_auth_context

logger = logging.getLogger(__name__)

router = APIRouter()


def _start_session(response: Response, user: User) -> None:
    token = create_session_token(user.id)
    set_session_cookie(response, token)


@router.post("/register", response_model=UserRead)
def register(
    user_create: UserCreate,
    response: Response,
    storage: DatabaseStorage = Depends(get_storage),
):
    # Check if user exists
    if storage.get_user_by_username(user_create.username):
        raise Conflict("Username already exists")

    # Create new user
    try:
        user = storage.create_user(
            username=user_create.username,
            password_hash=get_password_hash(user_create.password),
        )
    except IntegrityError:
        # Lost a race against a concurrent registration of the same name
        storage.session.rollback()
        raise Conflict("Username already exists")
    _start_session(response, user)
    logger.info("Registered user %s", user.id)
    return user


@router.post("/login", response_model=UserRead)
def login(
    user_credentials: UserLogin,
    response: Response,
    storage: DatabaseStorage = Depends(get_storage),
):
    # Username match is exact, no case folding
    user = storage.get_user_by_username(user_credentials.username)

    if not user or not verify_password(user_credentials.password, user.password):
        logger.warning("Failed login for username %r", user_credentials.username)
        raise Unauthenticated("Invalid credentials")

    _start_session(response, user)
    logger.info("User %s logged in", user.id)
    return user


@router.get("/me", response_model=UserRead)
def get_current_user_profile(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    user = storage.get_user(auth.user_id)
    if user is None:
        raise NotFound("User not found")
    return user


@router.post("/logout", response_model=Message)
def logout(response: Response):
    # Stateless sessions: the token itself stays valid until it expires
    clear_session_cookie(response)
    return Message(message="Logged out successfully")
