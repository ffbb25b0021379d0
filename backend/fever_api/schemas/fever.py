"""Fever Schemas: envelope and fixed-shape fragment entries.

Invariants:
    - Envelope always carries api_version, auth, last_refreshed_on_time
    - AuthFailure carries auth = 0 and nothing else
    - FeedsGroup.feed_ids is a comma-joined string, never a list

Design Decisions:
    - Literal auth values: an authenticated envelope cannot be built with auth=0 by mistake
    - Entity shapes (groups, feeds, items) stay on the ORM models' as_fever_json();
      only shapes assembled by the composer itself live here
"""

from typing import Literal

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """Baseline body of every authenticated response."""
    api_version: int = Field(3, ge=1)
    auth: Literal[1] = 1
    last_refreshed_on_time: int = Field(ge=0)


class AuthFailure(BaseModel):
    """Body returned when the api_key is missing or wrong."""
    auth: Literal[0] = 0


class FeedsGroup(BaseModel):
    """One feeds_groups entry: group id plus its feed ids."""
    group_id: int | str
    feed_ids: str


class Favicon(BaseModel):
    """One favicons entry: id plus `image/<type>;base64,<data>`."""
    id: int
    data: str
