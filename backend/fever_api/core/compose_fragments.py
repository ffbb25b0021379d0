"""Fragment Helpers: pure building blocks for Fever response fragments.

Invariants:
    - Id lists are serialized as ONE comma-joined string, never an array
    - Join order is the order the provider returned
    - merge_fragments never drops envelope keys and is deterministic for a given order

Design Decisions:
    - Favicon placeholder is a constant: favicon storage is not modelled, and
      every feed advertises favicon_id 0, so one transparent 1x1 GIF answers all
    - Links (saved searches) are acknowledged with an empty list
"""

from collections.abc import Iterable, Mapping
from typing import Any

PLACEHOLDER_FAVICON_ID = 0
PLACEHOLDER_FAVICON_DATA = (
    "image/gif;base64,"
    "R0lGODlhAQABAIAAAObm5gAAACH5BAEAAAAALAAAAAABAAEAAAICRAEAOw=="
)


def join_ids(ids: Iterable[Any]) -> str:
    """Comma-join ids in the given order: [1, 2] -> "1,2"."""
    return ",".join(str(i) for i in ids)


def ids_of(entities: Iterable[Any]) -> list[Any]:
    """The `id` attribute of every entity, order preserved."""
    return [entity.id for entity in entities]


def links_fragment() -> dict:
    return {"links": []}


def merge_fragments(
    envelope: Mapping[str, Any], fragments: Iterable[Mapping[str, Any]],
) -> dict:
    """Envelope plus the key union of all fragments, applied in order."""
    body = dict(envelope)
    for fragment in fragments:
        body.update(fragment)
    return body
