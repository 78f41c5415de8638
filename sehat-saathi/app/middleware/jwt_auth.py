"""JWT Authentication Middleware for the SehatSaathi service.

Most of the app is public (myth checker, hospital finder, emergencies), so
this middleware only *identifies* the caller. It reads the access token from
the `access_token` cookie or an `Authorization: Bearer` header, falls back to
the `refresh_token` cookie, and sets `request.state.user` to the decoded user
dict or None. Route dependencies decide whether a user is required.
"""

import logging
from typing import Optional, Dict, Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.auth.tokens import ACCESS, REFRESH, decode_jwt, payload_to_user
from app.config.settings import settings

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return None


def resolve_user(request: Request) -> Optional[Dict[str, Any]]:
    """Decode whichever token the request carries into a user dict."""
    access_token = request.cookies.get(settings.jwt_access_cookie_name) or _bearer_token(
        request
    )
    if access_token:
        payload = decode_jwt(access_token, expected_type=ACCESS)
        if payload:
            return payload_to_user(payload)

    refresh_token = request.cookies.get(settings.jwt_refresh_cookie_name)
    if refresh_token:
        payload = decode_jwt(refresh_token, expected_type=REFRESH)
        if payload:
            user = payload_to_user(payload)
            user["authenticated_via"] = "refresh_token"
            logger.info(
                "Authenticated via %s cookie (access token missing/expired) | user_id=%s",
                settings.jwt_refresh_cookie_name,
                user["userId"],
            )
            return user

    return None


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that attaches the caller's identity to request.state."""

    async def dispatch(self, request: Request, call_next):
        # CORS preflight carries no credentials
        if request.method == "OPTIONS":
            return await call_next(request)

        user = resolve_user(request)
        if user:
            logger.debug(
                "Request %s %s by user_id=%s role=%s",
                request.method,
                request.url.path,
                user["userId"],
                user["role"],
            )
        request.state.user = user
        return await call_next(request)
