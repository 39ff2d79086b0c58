"""
Caller identity.

Tokens are issued by the authentication service; this service only checks
the signature and reads the ``sub`` and ``role`` claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.value_objects.actor import Actor, ActorRole

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Roles a token may carry; ``system`` is internal only
TOKEN_ROLES = {ActorRole.CUSTOMER, ActorRole.PROVIDER, ActorRole.ADMIN}


def create_access_token(
    user_id: int, role: str, expires_minutes: int = 60, secret: Optional[str] = None
) -> str:
    """Mint a token in the shape the authentication service issues."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(
        to_encode, secret or settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> Actor:
    """Turn a bearer token into an Actor, or raise 401."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        claims = jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.info("Rejected bearer token", error=str(e))
        raise unauthorized

    try:
        user_id = int(claims["sub"])
        role = ActorRole(claims["role"])
    except (KeyError, TypeError, ValueError):
        raise unauthorized

    if role not in TOKEN_ROLES:
        raise unauthorized
    return Actor(id=user_id, role=role)


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Actor:
    """FastAPI dependency resolving the authenticated caller."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_access_token(credentials.credentials)
