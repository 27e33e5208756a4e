"""Authentication utilities for JWT handling.

Tokens are issued by the external auth provider and signed with a shared
HS256 secret. The `sub` claim carries the user UUID.

The memory decay trigger additionally accepts the scheduler secret
(Bearer <SCHEDULER_SECRET>) so an external cron can run decay.
"""

import hmac
import logging
from typing import Optional
from uuid import UUID

from jose import jwt, JWTError
from fastapi import Header, HTTPException, status

from wordmaster.core.config import settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.replace("Bearer ", "", 1)


def decode_user_id(token: str) -> Optional[UUID]:
    """
    Verify a JWT and return the user UUID from its `sub` claim.

    Returns None for any invalid, expired or malformed token, and always
    when JWT_SECRET is unset (dev mode).
    """
    if not settings.JWT_SECRET:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={
                "verify_exp": True,   # Reject expired tokens
                "verify_aud": True,
                "require_exp": True,
                "require_sub": True,
            },
        )
    except jwt.ExpiredSignatureError:
        # Token expired - frontend will refresh
        logger.warning("JWT expired")
        return None
    except JWTError as e:
        logger.warning("JWT error: %s", e)
        return None

    sub = payload.get("sub")
    try:
        return UUID(str(sub))
    except ValueError:
        logger.warning("JWT 'sub' claim is not a UUID")
        return None


async def get_current_user_id(
    authorization: Optional[str] = Header(None)
) -> Optional[UUID]:
    """
    Extract user_id from a Bearer JWT.

    Args:
        authorization: Authorization header with Bearer token

    Returns:
        User UUID if authenticated, None otherwise
    """
    token = _extract_bearer(authorization)
    if token is None:
        return None
    return decode_user_id(token)


async def require_current_user_id(
    authorization: Optional[str] = Header(None)
) -> UUID:
    """
    Extract and require user_id from a Bearer JWT.

    Raises:
        HTTPException: 401 if not authenticated
    """
    user_id = await get_current_user_id(authorization)

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id


def is_scheduler_secret(token: Optional[str]) -> bool:
    """Constant-time comparison against SCHEDULER_SECRET (never matches when unset)."""
    if not token or not settings.SCHEDULER_SECRET:
        return False
    return hmac.compare_digest(token, settings.SCHEDULER_SECRET)


async def require_scheduler_or_user(
    authorization: Optional[str] = Header(None)
) -> Optional[UUID]:
    """
    Accept either the scheduler secret or an authenticated user.

    Returns:
        None for the scheduler, the user UUID otherwise

    Raises:
        HTTPException: 401 if neither matches
    """
    token = _extract_bearer(authorization)
    if is_scheduler_secret(token):
        return None

    user_id = decode_user_id(token) if token else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Scheduler secret or user authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
