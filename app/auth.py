"""
Request authentication.

``AuthContext`` is what the controller consults; ``resolve_auth_context``
builds one from the ``Authorization: Bearer <token>`` header.  A missing,
malformed, unknown or expired token produces an unauthenticated context
rather than an error, so the controller decides how to answer.
"""
import logging
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import AuthToken, User

logger = logging.getLogger(__name__)


class AuthContext(Protocol):
    def is_authenticated(self) -> bool:
        ...

    def get_auth_user(self) -> User | None:
        ...


class TokenAuthContext:
    """AuthContext holding the user resolved for the current request (or None)."""

    def __init__(self, user: User | None = None) -> None:
        self._user = user

    def is_authenticated(self) -> bool:
        return self._user is not None

    def get_auth_user(self) -> User | None:
        return self._user


def parse_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization`` header value, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def resolve_auth_context(db: AsyncSession, authorization: str | None) -> TokenAuthContext:
    token = parse_bearer_token(authorization)
    if token is None:
        return TokenAuthContext()

    now = datetime.now(timezone.utc)
    q = (
        select(User)
        .join(AuthToken, AuthToken.user_id == User.id)
        .where(
            AuthToken.token == token,
            or_(AuthToken.expires_at.is_(None), AuthToken.expires_at > now),
        )
    )
    result = await db.execute(q)
    user = result.scalar_one_or_none()
    if user is None:
        logger.debug("Rejected unknown or expired bearer token")
    return TokenAuthContext(user)
