"""Response Composer: tests for fragment selection, shapes, and merge.

Tests cover:
    - No flags -> bare envelope
    - groups/feeds fragments with comma-joined feeds_groups
    - favicons placeholder, links empty list
    - items: since_id listing vs global total, with_ids fetched twice with string ids,
      default unread listing
    - unread_item_ids / saved_item_ids joined in provider order
    - Multiple flags merge into one object
    - Identical collaborator state -> identical body
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from fever_api.core.request_flags import interpret_read_request
from fever_api.services.compose_response import (
    FeverResponseComposer,
    build_auth_failure,
    build_envelope,
)

ENVELOPE = {"api_version": 3, "auth": 1, "last_refreshed_on_time": 123456789}


class _Entity(SimpleNamespace):
    def as_fever_json(self) -> dict:
        return {"id": self.id, "kind": self.kind}


def _story(story_id):
    return _Entity(id=story_id, kind="story")


def _make_providers():
    group = _Entity(id=1, kind="group")
    feed = _Entity(id=3, kind="feed")
    groups = SimpleNamespace(list=AsyncMock(return_value=[group]))
    feeds = SimpleNamespace(
        list=AsyncMock(return_value=[feed]),
        in_group=AsyncMock(return_value=[feed]),
    )
    stories = SimpleNamespace(
        unread=AsyncMock(return_value=[_story(1), _story(2)]),
        unread_since_id=AsyncMock(return_value=[_story(2)]),
        fetch_by_ids=AsyncMock(return_value=[_story(5)]),
        starred=AsyncMock(return_value=[_story(1), _story(2)]),
    )
    return groups, feeds, stories


async def _compose(params, providers=None):
    groups, feeds, stories = providers or _make_providers()
    composer = FeverResponseComposer(groups, feeds, stories)
    return await composer.compose(interpret_read_request(params), dict(ENVELOPE))


async def test_no_flags_returns_bare_envelope():
    assert await _compose({}) == ENVELOPE


async def test_groups_fragment():
    body = await _compose({"groups": ""})
    assert body["groups"] == [{"id": 1, "kind": "group"}]
    assert body["feeds_groups"] == [{"group_id": 1, "feed_ids": "3"}]


async def test_feeds_fragment():
    body = await _compose({"feeds": ""})
    assert body["feeds"] == [{"id": 3, "kind": "feed"}]
    assert body["feeds_groups"] == [{"group_id": 1, "feed_ids": "3"}]


async def test_feeds_groups_asks_for_group_id_as_string():
    providers = _make_providers()
    await _compose({"groups": ""}, providers)
    providers[1].in_group.assert_awaited_once_with("1")


async def test_feeds_groups_joins_two_feeds():
    groups, feeds, stories = _make_providers()
    feeds.in_group = AsyncMock(return_value=[_Entity(id=1), _Entity(id=2)])
    body = await _compose({"groups": ""}, (groups, feeds, stories))
    assert body["feeds_groups"] == [{"group_id": 1, "feed_ids": "1,2"}]


async def test_feeds_groups_skips_groups_without_feeds():
    groups, feeds, stories = _make_providers()
    groups.list = AsyncMock(return_value=[_Entity(id=1, kind="group"), _Entity(id=2, kind="group")])
    feeds.in_group = AsyncMock(side_effect=[[_Entity(id=4)], []])
    body = await _compose({"groups": ""}, (groups, feeds, stories))
    assert body["feeds_groups"] == [{"group_id": 1, "feed_ids": "4"}]


async def test_favicons_placeholder():
    body = await _compose({"favicons": ""})
    assert body["favicons"] == [{
        "id": 0,
        "data": "image/gif;base64,R0lGODlhAQABAIAAAObm5gAAACH5BAEAAAAALAAAAAABAAEAAAICRAEAOw==",
    }]


async def test_links_is_empty_list():
    body = await _compose({"links": ""})
    assert body["links"] == []


async def test_items_since_id_uses_global_unread_total():
    groups, feeds, stories = _make_providers()
    body = await _compose({"items": "", "since_id": "5"}, (groups, feeds, stories))
    stories.unread_since_id.assert_awaited_once_with("5")
    stories.unread.assert_awaited_once_with()
    assert body["items"] == [{"id": 2, "kind": "story"}]
    assert body["total_items"] == 2


async def test_items_without_selector_lists_unread():
    groups, feeds, stories = _make_providers()
    body = await _compose({"items": ""}, (groups, feeds, stories))
    assert stories.unread.await_count == 2
    assert body["items"] == [{"id": 1, "kind": "story"}, {"id": 2, "kind": "story"}]
    assert body["total_items"] == 2


async def test_items_with_ids_fetches_same_string_ids_twice():
    groups, feeds, stories = _make_providers()
    body = await _compose({"items": "", "with_ids": "5"}, (groups, feeds, stories))
    assert stories.fetch_by_ids.await_count == 2
    for call in stories.fetch_by_ids.await_args_list:
        assert call.args == (["5"],)
    assert body["items"] == [{"id": 5, "kind": "story"}]
    assert body["total_items"] == 1


async def test_unread_item_ids_joined():
    body = await _compose({"unread_item_ids": ""})
    assert body["unread_item_ids"] == "1,2"


async def test_saved_item_ids_joined():
    body = await _compose({"saved_item_ids": ""})
    assert body["saved_item_ids"] == "1,2"


async def test_multiple_flags_merge_union_of_keys():
    body = await _compose({"groups": "", "feeds": "", "links": ""})
    assert set(body) == set(ENVELOPE) | {"groups", "feeds", "feeds_groups", "links"}


async def test_repeated_compose_is_identical():
    params = {"groups": "", "feeds": "", "items": "", "unread_item_ids": ""}
    assert await _compose(params) == await _compose(params)


async def test_provider_errors_propagate():
    groups, feeds, stories = _make_providers()
    stories.unread = AsyncMock(side_effect=RuntimeError("db down"))
    with pytest.raises(RuntimeError):
        await _compose({"unread_item_ids": ""}, (groups, feeds, stories))


def test_build_envelope_uses_clock():
    clock = SimpleNamespace(now=lambda: 42)
    assert build_envelope(3, clock) == {
        "api_version": 3, "auth": 1, "last_refreshed_on_time": 42,
    }


def test_build_auth_failure_is_auth_zero_only():
    assert build_auth_failure() == {"auth": 0}
