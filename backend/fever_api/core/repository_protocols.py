"""Boundary Protocols: contracts between the Fever core and its collaborators.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Ids cross these boundaries as strings; implementations convert if storage needs integers
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes (ADR: no inheritance hierarchy)
    - Async providers: implementations do IO; the composer awaits them in table order
    - Key lookup injected instead of a module-level "the user" singleton so a
      multi-account lookup can replace it without touching the core
"""

from typing import Any, Protocol, Sequence

from fever_api.core.domain_types import FeedId, GroupId, ItemId, UnixTimestamp


class FeverEntity(Protocol):
    """Anything rendered into a response: has an id and a protocol shape."""
    id: Any

    def as_fever_json(self) -> dict: ...


class ApiKeyLookup(Protocol):
    """Contract for finding the registered Fever key of the (single) account."""
    async def current_registered_key(self) -> str | None: ...


class Clock(Protocol):
    """Source of `last_refreshed_on_time`."""
    def now(self) -> int: ...


class GroupProvider(Protocol):
    """Contract for group reads: implemented by shell."""
    async def list(self) -> Sequence[FeverEntity]: ...


class FeedProvider(Protocol):
    """Contract for feed reads: implemented by shell."""
    async def list(self) -> Sequence[FeverEntity]: ...
    async def in_group(self, group_id: GroupId) -> Sequence[FeverEntity]: ...


class StoryProvider(Protocol):
    """Contract for story reads: implemented by shell."""
    async def unread(self) -> Sequence[FeverEntity]: ...
    async def unread_since_id(self, since_id: ItemId) -> Sequence[FeverEntity]: ...
    async def fetch_by_ids(self, ids: Sequence[ItemId]) -> Sequence[FeverEntity]: ...
    async def starred(self) -> Sequence[FeverEntity]: ...


class MarkCommand(Protocol):
    """A single authoritative mutation. Executed exactly once, result unused."""
    async def execute(self) -> None: ...


class ItemCommandFactory(Protocol):
    """Builds an item mark command from the raw story id."""
    def __call__(self, item_id: ItemId) -> MarkCommand: ...


class TimestampedCommandFactory(Protocol):
    """Builds a group/feed mark command from the raw id and `before` timestamp."""
    def __call__(
        self, target_id: GroupId | FeedId, before: UnixTimestamp,
    ) -> MarkCommand: ...
