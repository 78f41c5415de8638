"""FastAPI dependencies for authentication and role checks.

The JWTAuthMiddleware stores the decoded user in `request.state.user`:
    {
        "userId":    str,   # UUID
        "username":  str,
        "fullName":  str,
        "role":      str,   # "PATIENT" | "DOCTOR" | "HOSPITAL" | "ADMIN"
        "tokenType": str,   # "ACCESS" | "REFRESH"
    }
"""

from typing import Dict, Any, Optional

from fastapi import Depends, HTTPException, Request, status
from app.models.enums import UserRole
import logging

logger = logging.getLogger(__name__)


async def get_optional_user(request: Request) -> Optional[Dict[str, Any]]:
    """Return the user attached by JWTAuthMiddleware, or None for anonymous callers."""
    return getattr(request.state, "user", None)


async def get_current_user(request: Request) -> Dict[str, Any]:
    """Return the authenticated user.

    Raises:
        HTTP 401 if the request carries no valid token
    """
    user: Dict[str, Any] | None = getattr(request.state, "user", None)

    if not user or not user.get("userId"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Please log in.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_roles(*roles: UserRole):
    """Build a dependency that only lets the given roles (and ADMIN) through."""
    allowed = {r.value for r in roles} | {UserRole.ADMIN.value}

    async def _check(
        current_user: Dict[str, Any] = Depends(get_current_user),
    ) -> Dict[str, Any]:
        if current_user.get("role") not in allowed:
            logger.warning(
                "User %s with role %s denied (needs one of %s)",
                current_user.get("userId"),
                current_user.get("role"),
                sorted(allowed),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action.",
            )
        return current_user

    return _check
