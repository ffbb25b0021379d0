"""Request Interpreter: turns raw GET parameters into a ReadRequest.

Invariants:
    - A flag is selected by presence alone; its value (often empty) is ignored
    - with_ids takes precedence over since_id; neither means all unread items
    - Selector values stay strings: "5" is never turned into 5
    - Unknown parameters are ignored (clients also send `api`, `api_key`, ...)

Design Decisions:
    - Frozen dataclasses: a ReadRequest is built once per request and never mutated
    - Flags kept in FeatureFlag declaration order so evaluation order is stable
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from fever_api.core.domain_types import FeatureFlag, ItemId, ItemSelectorKind


@dataclass(frozen=True)
class ItemSelector:
    """Which stories back the `items` fragment."""
    kind: ItemSelectorKind = ItemSelectorKind.ALL_UNREAD
    since_id: ItemId | None = None
    ids: tuple[ItemId, ...] = ()


@dataclass(frozen=True)
class ReadRequest:
    """Interpreted GET request: selected flags plus the item selector."""
    flags: tuple[FeatureFlag, ...] = ()
    selector: ItemSelector = field(default_factory=ItemSelector)

    def wants(self, flag: FeatureFlag) -> bool:
        return flag in self.flags


def split_ids(raw: str) -> tuple[ItemId, ...]:
    """Split a comma-separated id list, dropping blanks. Ids stay strings."""
    return tuple(
        ItemId(part.strip()) for part in raw.split(",") if part.strip()
    )


def select_items(params: Mapping[str, str]) -> ItemSelector:
    """Pick the item selector; with_ids wins over since_id."""
    if "with_ids" in params:
        return ItemSelector(
            kind=ItemSelectorKind.WITH_IDS,
            ids=split_ids(params["with_ids"] or ""),
        )
    if "since_id" in params:
        return ItemSelector(
            kind=ItemSelectorKind.SINCE_ID,
            since_id=ItemId(params["since_id"] or ""),
        )
    return ItemSelector()


def interpret_read_request(params: Mapping[str, str]) -> ReadRequest:
    """Build a ReadRequest from the request's key/value parameters."""
    flags = tuple(flag for flag in FeatureFlag if flag.value in params)
    selector = (
        select_items(params) if FeatureFlag.ITEMS in flags else ItemSelector()
    )
    return ReadRequest(flags=flags, selector=selector)
