"""Login and signup endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from app.api.dependencies import get_current_user
from app.auth.tokens import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_jwt,
)
from app.config.settings import settings
from app.models.messages import LoginRequest, LoginResponse, SignupRequest, UserModel
from app.models.user import User
from app.services.user_service import UsernameTakenError, get_user_service
from typing import Any, Dict
import re
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])

_USERNAME_RE = re.compile(r"^[a-z0-9_.]{3,32}$")
MIN_PASSWORD_LENGTH = 6


def normalize_username(username: str) -> str:
    return username.strip().lower()


def _to_model(user: User) -> UserModel:
    return UserModel(**user.public_dict())


def _set_access_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.jwt_access_cookie_name,
        token,
        max_age=settings.access_token_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def _set_refresh_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.jwt_refresh_cookie_name,
        token,
        max_age=settings.refresh_token_days * 24 * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/signup", response_model=UserModel, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest):
    """Create a patient account."""
    username = normalize_username(request.username)
    full_name = request.full_name.strip()

    if not full_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Full name is required"
        )
    if not _USERNAME_RE.match(username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username must be 3-32 characters: letters, digits, '_' or '.'",
        )
    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    try:
        user = await get_user_service().create_user(
            username=username, full_name=full_name, password=request.password
        )
    except UsernameTakenError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Username is already taken"
        )
    return _to_model(user)


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response):
    """Log in and receive access/refresh cookies."""
    user = await get_user_service().authenticate(
        normalize_username(request.username), request.password
    )
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    access_token = create_access_token(user)
    _set_access_cookie(response, access_token)
    _set_refresh_cookie(response, create_refresh_token(user))

    logger.info(f"User {user.user_id} logged in")
    return LoginResponse(user=_to_model(user), access_token=access_token)


@router.post("/refresh", response_model=LoginResponse)
async def refresh(request: Request, response: Response):
    """Mint a new access token from the refresh cookie."""
    token = request.cookies.get(settings.jwt_refresh_cookie_name)
    payload = decode_jwt(token, expected_type=REFRESH) if token else None
    user = await get_user_service().get_by_id(payload["userId"]) if payload else None

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired. Please log in again.",
        )

    access_token = create_access_token(user)
    _set_access_cookie(response, access_token)
    return LoginResponse(user=_to_model(user), access_token=access_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    response.delete_cookie(settings.jwt_access_cookie_name)
    response.delete_cookie(settings.jwt_refresh_cookie_name)


@router.get("/me", response_model=UserModel)
async def me(current_user: Dict[str, Any] = Depends(get_current_user)):
    """The logged-in user's account."""
    user = await get_user_service().get_by_id(current_user["userId"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists"
        )
    return _to_model(user)
