# app/services/auth_service.py
"""
Session gate
Resolves the caller from the auth provider's session table
"""

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from app.models import AuthSession, User, utcnow
from app.services.letter_store import LetterStore
from app.utils.errors import UnauthorizedError
from app.utils.logger import logger

SESSION_TTL = timedelta(days=7)


def token_from_cookie(cookie_value: Optional[str]) -> Optional[str]:
    """Signed cookies look like '<token>.<signature>'"""
    if not cookie_value:
        return None
    return cookie_value.split(".", 1)[0] or None


class SessionGate:
    def __init__(self, store: LetterStore):
        self.async_session = store.async_session

    async def resolve(self, token: Optional[str]) -> str:
        """Return the user id owning a live session token"""
        if not token:
            raise UnauthorizedError()

        try:
            async with self.async_session() as session:
                query = select(AuthSession.USER_ID, AuthSession.EXPIRES_AT).where(
                    AuthSession.TOKEN == token
                )
                result = await session.execute(query)
                row = result.first()
        except SQLAlchemyError as e:
            logger.error(f"Session lookup failed: {e}")
            raise UnauthorizedError()

        if not row:
            raise UnauthorizedError()

        user_id, expires_at = row
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= datetime.now(timezone.utc):
            logger.info(f"Expired session for user={user_id}")
            raise UnauthorizedError()

        return user_id

    async def issue_session(
        self,
        user_id: str,
        name: str = "",
        email: Optional[str] = None,
        ttl: timedelta = SESSION_TTL
    ) -> str:
        """Create the user if needed and open a session for it"""
        async with self.async_session() as session:
            async with session.begin():
                user = await session.get(User, user_id)
                if user is None:
                    session.add(User(
                        USER_ID=user_id,
                        NAME=name or user_id,
                        EMAIL=email or f"{user_id}@users.local"
                    ))
                token = secrets.token_urlsafe(32)
                session.add(AuthSession(
                    SESSION_ID=str(uuid.uuid4()),
                    TOKEN=token,
                    USER_ID=user_id,
                    EXPIRES_AT=utcnow() + ttl
                ))
        logger.info(f"Session issued for user={user_id}")
        return token
