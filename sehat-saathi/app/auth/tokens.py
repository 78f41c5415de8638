"""JWT issuing and decoding.

Claims:
  - sub        : username
  - userId     : UUID string
  - role       : PATIENT | DOCTOR | HOSPITAL | ADMIN
  - fullName   : display name (ACCESS token only)
  - tokenType  : "ACCESS" | "REFRESH"
  - iss        : settings.jwt_issuer
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from app.config.settings import settings
from app.models.user import User

logger = logging.getLogger(__name__)

ACCESS = "ACCESS"
REFRESH = "REFRESH"


def _encode(claims: Dict[str, Any], lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iss": settings.jwt_issuer,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    return _encode(
        {
            "sub": user.username,
            "userId": user.user_id,
            "role": user.role.value,
            "fullName": user.full_name,
            "tokenType": ACCESS,
        },
        timedelta(minutes=settings.access_token_minutes),
    )


def create_refresh_token(user: User) -> str:
    return _encode(
        {
            "sub": user.username,
            "userId": user.user_id,
            "role": user.role.value,
            "tokenType": REFRESH,
        },
        timedelta(days=settings.refresh_token_days),
    )


def decode_jwt(token: str, expected_type: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Decode and verify a token.

    Returns the full payload dict, or None if the token is invalid, expired
    or of the wrong type.
    """
    try:
        payload: Dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        logger.debug("JWT token has expired")
        return None
    except InvalidTokenError as exc:
        logger.debug("Invalid JWT token: %s", exc)
        return None

    if expected_type and payload.get("tokenType") != expected_type:
        logger.debug("JWT token type %s, expected %s", payload.get("tokenType"), expected_type)
        return None
    return payload


def payload_to_user(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Map JWT payload claims to the request.state.user dict."""
    return {
        "userId": payload.get("userId", ""),
        "username": payload.get("sub", ""),
        "fullName": payload.get("fullName", ""),
        "role": payload.get("role", ""),
        "tokenType": payload.get("tokenType", ""),
    }
