from datetime import datetime, timedelta, timezone

import jwt

from auth.domain.entities import Actor
from shared.config import settings
from shared.exceptions import AuthenticationError


def verify_token(token: str) -> Actor:
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired token")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Token has no subject")
    return Actor(id=str(subject), name=payload.get("name"))


def issue_token(actor: Actor, expires_minutes: int | None = None) -> str:
    """Mint a token for ``actor``. Used by the seed script and tests."""
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRATION_MINUTES
    payload = {
        "sub": actor.id,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    if actor.name:
        payload["name"] = actor.name
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
