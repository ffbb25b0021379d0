"""Domain Types: rich types that replace bare primitives across the protocol boundary.

Invariants:
    - ItemId, FeedId, GroupId, UnixTimestamp wrap str: ids are never parsed as integers
      before they reach a repository
    - FeatureFlag order is the fragment evaluation order
    - All valid mark targets/actions encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: values are the exact wire parameter names, lookups via Enum(value)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", str)
FeedId = NewType("FeedId", str)
GroupId = NewType("GroupId", str)


# ─── Value Types ─────────────────────────────────────────────────

UnixTimestamp = NewType("UnixTimestamp", str)   # seconds since epoch, as sent


# ─── Enums ───────────────────────────────────────────────────────

class FeatureFlag(str, Enum):
    """GET parameters whose presence selects a response fragment."""
    GROUPS = "groups"
    FEEDS = "feeds"
    FAVICONS = "favicons"
    ITEMS = "items"
    LINKS = "links"
    UNREAD_ITEM_IDS = "unread_item_ids"
    SAVED_ITEM_IDS = "saved_item_ids"


class MarkTarget(str, Enum):
    """What a POST mark request points at (the `mark` parameter)."""
    ITEM = "item"
    GROUP = "group"
    FEED = "feed"


class MarkAs(str, Enum):
    """State requested by a POST mark request (the `as` parameter)."""
    READ = "read"
    UNREAD = "unread"
    SAVED = "saved"
    UNSAVED = "unsaved"


class ItemSelectorKind(str, Enum):
    """Which story query backs the `items` fragment."""
    ALL_UNREAD = "all_unread"
    SINCE_ID = "since_id"
    WITH_IDS = "with_ids"
