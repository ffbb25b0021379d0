"""Key Lookup: finds the registered Fever api_key for the single reader.

Invariants:
    - A configured key (settings) always wins over the database
    - Without a configured key, the first users row (lowest id) is the reader
    - Returns None when no key is registered anywhere (every request then fails auth)

Design Decisions:
    - Injected per request (FastAPI Depends) instead of a global "current user",
      so a multi-account lookup can replace it without touching the core
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fever_api.models import User


class RegisteredKeyLookup:
    """ApiKeyLookup backed by settings, then by the users table."""

    def __init__(self, db: AsyncSession | None, configured_key: str | None = None):
        self._db = db
        self._configured_key = configured_key

    async def current_registered_key(self) -> str | None:
        if self._configured_key:
            return self._configured_key
        if self._db is None:
            return None
        result = await self._db.execute(
            select(User.api_key).order_by(User.id).limit(1),
        )
        return result.scalar_one_or_none()
