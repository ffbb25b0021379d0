"""Repositories: SQLAlchemy implementations of the Fever provider protocols.

Invariants:
    - Ids arrive as strings; conversion to int happens here and nowhere else
    - Ids that are not integers, or overflow a signed 64-bit column, match nothing
      (no exception, no coercion to 0)
    - Read queries never mutate; write queries commit their own unit of work
    - Orderings: groups/feeds by lower-cased name, in_group by id, unread and starred
      by newest published first, since_id and with_ids by ascending id

Design Decisions:
    - One repository per entity, each wrapping the request's AsyncSession
      (ADR: collaborators are injected, core never sees the ORM)
    - Bulk UPDATE statements for mark commands: one round-trip, no object loading
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fever_api.core.domain_types import FeedId, GroupId, ItemId
from fever_api.models import Feed, Group, Story

logger = logging.getLogger(__name__)

MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def to_int_id(raw: str | None) -> int | None:
    """Parse a protocol id; None for anything that is not a 64-bit integer."""
    if raw is None:
        return None
    try:
        parsed = int(str(raw).strip())
    except ValueError:
        return None
    if not MIN_ID <= parsed <= MAX_ID:
        return None
    return parsed


def to_int_ids(raws: Iterable[str]) -> list[int]:
    """Parse protocol ids, dropping the ones that are not integers."""
    ids = []
    for raw in raws:
        parsed = to_int_id(raw)
        if parsed is None:
            logger.debug(f"Ignoring non-integer id {raw!r}")
            continue
        ids.append(parsed)
    return ids


class GroupRepository:
    """Group reads."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> Sequence[Group]:
        result = await self.db.execute(
            select(Group).order_by(func.lower(Group.name), Group.id),
        )
        return result.scalars().all()


class FeedRepository:
    """Feed reads."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> Sequence[Feed]:
        result = await self.db.execute(
            select(Feed).order_by(func.lower(Feed.name), Feed.id),
        )
        return result.scalars().all()

    async def in_group(self, group_id: GroupId) -> Sequence[Feed]:
        gid = to_int_id(group_id)
        if gid is None:
            return []
        result = await self.db.execute(
            select(Feed).where(Feed.group_id == gid).order_by(Feed.id),
        )
        return result.scalars().all()


class StoryRepository:
    """Story reads plus the read/starred updates behind mark commands."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def unread(self) -> Sequence[Story]:
        result = await self.db.execute(
            select(Story)
            .where(Story.is_read.is_(False))
            .order_by(Story.published.desc(), Story.id.desc()),
        )
        return result.scalars().all()

    async def unread_since_id(self, since_id: ItemId) -> Sequence[Story]:
        cursor = to_int_id(since_id)
        if cursor is None:
            return []
        result = await self.db.execute(
            select(Story)
            .where(Story.is_read.is_(False))
            .where(Story.id > cursor)
            .order_by(Story.id),
        )
        return result.scalars().all()

    async def fetch_by_ids(self, ids: Sequence[ItemId]) -> Sequence[Story]:
        int_ids = to_int_ids(ids)
        if not int_ids:
            return []
        result = await self.db.execute(
            select(Story).where(Story.id.in_(int_ids)).order_by(Story.id),
        )
        return result.scalars().all()

    async def starred(self) -> Sequence[Story]:
        result = await self.db.execute(
            select(Story)
            .where(Story.is_starred.is_(True))
            .order_by(Story.published.desc(), Story.id.desc()),
        )
        return result.scalars().all()

    # ─── Writes ─────────────────────────────────────────────────

    async def set_read(self, item_id: ItemId, is_read: bool) -> int:
        return await self._update_story(item_id, is_read=is_read)

    async def set_starred(self, item_id: ItemId, is_starred: bool) -> int:
        return await self._update_story(item_id, is_starred=is_starred)

    async def mark_feed_read_before(self, feed_id: FeedId, before: datetime) -> int:
        fid = to_int_id(feed_id)
        if fid is None:
            return 0
        return await self._mark_unread_read(
            Story.feed_id == fid, Story.created_at < before,
        )

    async def mark_group_read_before(self, group_id: GroupId, before: datetime) -> int:
        gid = to_int_id(group_id)
        if gid is None:
            return 0
        feed_ids = select(Feed.id).where(Feed.group_id == gid)
        return await self._mark_unread_read(
            Story.feed_id.in_(feed_ids), Story.created_at < before,
        )

    async def mark_all_read_before(self, before: datetime) -> int:
        return await self._mark_unread_read(Story.created_at < before)

    async def _update_story(self, item_id: ItemId, **values: bool) -> int:
        sid = to_int_id(item_id)
        if sid is None:
            return 0
        result = await self.db.execute(
            update(Story).where(Story.id == sid).values(**values),
        )
        await self.db.commit()
        return result.rowcount

    async def _mark_unread_read(self, *criteria) -> int:
        result = await self.db.execute(
            update(Story)
            .where(Story.is_read.is_(False), *criteria)
            .values(is_read=True)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount
