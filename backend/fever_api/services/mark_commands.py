"""Mark Commands: the single-purpose mutations behind POST mark requests.

Invariants:
    - Constructors take the raw protocol strings (id, before) unmodified
    - execute() performs exactly one UPDATE + commit and returns nothing the response uses
    - A `before` that is not a unix timestamp makes group/feed commands a no-op
    - Group id "0" is Fever's Kindling super-group: every feed

Design Decisions:
    - One class per command, mirroring the protocol table one-to-one
      (ADR: every mapping visible, no flag arguments)
    - Commands log affected row counts at debug level only: clients poll often
"""

import logging

from fever_api.core.domain_types import FeedId, GroupId, ItemId, UnixTimestamp
from fever_api.core.timestamps import from_unix
from fever_api.services.repositories import StoryRepository

logger = logging.getLogger(__name__)

KINDLING_GROUP_ID = "0"


class MarkAsRead:
    """mark=item&as=read"""

    def __init__(self, item_id: ItemId, stories: StoryRepository):
        self.item_id = item_id
        self.stories = stories

    async def execute(self) -> None:
        count = await self.stories.set_read(self.item_id, True)
        logger.debug(f"Marked item {self.item_id} read ({count} row)")


class MarkAsUnread:
    """mark=item&as=unread"""

    def __init__(self, item_id: ItemId, stories: StoryRepository):
        self.item_id = item_id
        self.stories = stories

    async def execute(self) -> None:
        count = await self.stories.set_read(self.item_id, False)
        logger.debug(f"Marked item {self.item_id} unread ({count} row)")


class MarkAsStarred:
    """mark=item&as=saved"""

    def __init__(self, item_id: ItemId, stories: StoryRepository):
        self.item_id = item_id
        self.stories = stories

    async def execute(self) -> None:
        count = await self.stories.set_starred(self.item_id, True)
        logger.debug(f"Starred item {self.item_id} ({count} row)")


class MarkAsUnstarred:
    """mark=item&as=unsaved"""

    def __init__(self, item_id: ItemId, stories: StoryRepository):
        self.item_id = item_id
        self.stories = stories

    async def execute(self) -> None:
        count = await self.stories.set_starred(self.item_id, False)
        logger.debug(f"Unstarred item {self.item_id} ({count} row)")


class MarkFeedAsRead:
    """mark=feed&as=read&before=<ts>: unread stories of one feed created before ts."""

    def __init__(self, feed_id: FeedId, before: UnixTimestamp, stories: StoryRepository):
        self.feed_id = feed_id
        self.before = before
        self.stories = stories

    async def execute(self) -> None:
        before = from_unix(self.before)
        if before is None:
            logger.warning(f"Ignoring feed mark with invalid before={self.before!r}")
            return
        count = await self.stories.mark_feed_read_before(self.feed_id, before)
        logger.debug(f"Marked {count} stories of feed {self.feed_id} read")


class MarkGroupAsRead:
    """mark=group&as=read&before=<ts>: unread stories of a group created before ts."""

    def __init__(self, group_id: GroupId, before: UnixTimestamp, stories: StoryRepository):
        self.group_id = group_id
        self.before = before
        self.stories = stories

    async def execute(self) -> None:
        before = from_unix(self.before)
        if before is None:
            logger.warning(f"Ignoring group mark with invalid before={self.before!r}")
            return
        if self.group_id.strip() == KINDLING_GROUP_ID:
            count = await self.stories.mark_all_read_before(before)
        else:
            count = await self.stories.mark_group_read_before(self.group_id, before)
        logger.debug(f"Marked {count} stories of group {self.group_id} read")
