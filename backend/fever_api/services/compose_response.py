"""Response Composer: builds Fever fragments from providers and merges them.

Invariants:
    - One builder per FeatureFlag, evaluated in table order, each independent
    - Every entity rendered through as_fever_json(): no ad hoc field subsets
    - feeds_groups computed by one method whichever flag asked for it
    - total_items: with_ids -> size of the id fetch (same id list fetched twice);
      since_id -> size of ALL unread stories; otherwise size of the unread listing query
    - No flags -> the envelope alone

Design Decisions:
    - Strategy table of (flag, builder) over reflective parameter inspection:
      order and merge semantics explicit and testable
    - Sequential awaits: one AsyncSession cannot run concurrent statements, and the
      merge order stays the table order
"""

import logging
from collections.abc import Iterable
from typing import Any, Awaitable, Callable

from fever_api.core.compose_fragments import (
    PLACEHOLDER_FAVICON_DATA,
    PLACEHOLDER_FAVICON_ID,
    ids_of,
    join_ids,
    links_fragment,
    merge_fragments,
)
from fever_api.core.domain_types import FeatureFlag, GroupId, ItemSelectorKind
from fever_api.core.repository_protocols import (
    Clock,
    FeedProvider,
    FeverEntity,
    GroupProvider,
    StoryProvider,
)
from fever_api.core.request_flags import ItemSelector, ReadRequest
from fever_api.schemas.fever import AuthFailure, Envelope, Favicon, FeedsGroup

logger = logging.getLogger(__name__)

FragmentBuilder = Callable[[ReadRequest], Awaitable[dict[str, Any]]]


def build_envelope(api_version: int, clock: Clock) -> dict:
    """Authenticated baseline body."""
    return Envelope(
        api_version=api_version, last_refreshed_on_time=clock.now(),
    ).model_dump()


def build_auth_failure() -> dict:
    """Unauthenticated body: {"auth": 0} and nothing else."""
    return AuthFailure().model_dump()


def _render(entities: Iterable[FeverEntity]) -> list[dict]:
    return [entity.as_fever_json() for entity in entities]


class FeverResponseComposer:
    """Computes the fragments a ReadRequest selects and merges them into the envelope."""

    def __init__(
        self,
        groups: GroupProvider,
        feeds: FeedProvider,
        stories: StoryProvider,
    ):
        self._groups = groups
        self._feeds = feeds
        self._stories = stories

        self._builders: tuple[tuple[FeatureFlag, FragmentBuilder], ...] = (
            (FeatureFlag.GROUPS, self._groups_fragment),
            (FeatureFlag.FEEDS, self._feeds_fragment),
            (FeatureFlag.FAVICONS, self._favicons_fragment),
            (FeatureFlag.ITEMS, self._items_fragment),
            (FeatureFlag.LINKS, self._links_fragment),
            (FeatureFlag.UNREAD_ITEM_IDS, self._unread_item_ids_fragment),
            (FeatureFlag.SAVED_ITEM_IDS, self._saved_item_ids_fragment),
        )

    async def compose(self, request: ReadRequest, envelope: dict) -> dict:
        """Envelope merged with every fragment the request selects."""
        fragments = []
        for flag, build in self._builders:
            if request.wants(flag):
                fragments.append(await build(request))
        return merge_fragments(envelope, fragments)

    # ─── Builders ───────────────────────────────────────────────

    async def _groups_fragment(self, request: ReadRequest) -> dict:
        groups = list(await self._groups.list())
        return {
            "groups": _render(groups),
            "feeds_groups": await self._feeds_groups(groups),
        }

    async def _feeds_fragment(self, request: ReadRequest) -> dict:
        feeds = list(await self._feeds.list())
        return {
            "feeds": _render(feeds),
            "feeds_groups": await self._feeds_groups(list(await self._groups.list())),
        }

    async def _favicons_fragment(self, request: ReadRequest) -> dict:
        favicon = Favicon(id=PLACEHOLDER_FAVICON_ID, data=PLACEHOLDER_FAVICON_DATA)
        return {"favicons": [favicon.model_dump()]}

    async def _items_fragment(self, request: ReadRequest) -> dict:
        listing, total = await self._select_items(request.selector)
        return {"items": _render(listing), "total_items": total}

    async def _links_fragment(self, request: ReadRequest) -> dict:
        return links_fragment()

    async def _unread_item_ids_fragment(self, request: ReadRequest) -> dict:
        unread = await self._stories.unread()
        return {"unread_item_ids": join_ids(ids_of(unread))}

    async def _saved_item_ids_fragment(self, request: ReadRequest) -> dict:
        starred = await self._stories.starred()
        return {"saved_item_ids": join_ids(ids_of(starred))}

    # ─── Helpers ────────────────────────────────────────────────

    async def _feeds_groups(self, groups: list[FeverEntity]) -> list[dict]:
        """One entry per group that has feeds; feed ids comma-joined."""
        entries = []
        for group in groups:
            feeds = await self._feeds.in_group(GroupId(str(group.id)))
            if not feeds:
                continue
            entries.append(FeedsGroup(
                group_id=group.id, feed_ids=join_ids(ids_of(feeds)),
            ).model_dump())
        return entries

    async def _select_items(self, selector: ItemSelector) -> tuple[list, int]:
        """Listing plus total_items for the selector."""
        if selector.kind is ItemSelectorKind.WITH_IDS:
            ids = list(selector.ids)
            listing = list(await self._stories.fetch_by_ids(ids))
            total = len(await self._stories.fetch_by_ids(ids))
            return listing, total
        if selector.kind is ItemSelectorKind.SINCE_ID:
            listing = list(await self._stories.unread_since_id(selector.since_id))
            total = len(await self._stories.unread())
            return listing, total
        listing = list(await self._stories.unread())
        total = len(await self._stories.unread())
        return listing, total
