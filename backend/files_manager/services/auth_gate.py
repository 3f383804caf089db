"""Token-auth gate backed by the auth_tokens table.

Tokens are issued by the account service; this side only looks them up.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from files_manager.models.auth_token import AuthToken


class DatabaseTokenGate:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def resolve_identity(self, token: str | None) -> str | None:
        """Return the user id for ``token``, or None if it is missing or unknown."""
        if not token:
            return None
        async with self._session_factory() as db:
            result = await db.execute(
                select(AuthToken.user_id).where(AuthToken.token == token)
            )
            return result.scalar_one_or_none()
