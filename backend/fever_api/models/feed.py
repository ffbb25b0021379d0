"""Feed ORM: a subscribed RSS/Atom source.

Invariants:
    - url is unique and non-nullable
    - group_id is nullable (ungrouped feeds)
    - last_fetched is stored timezone-aware; exported as unix seconds

Design Decisions:
    - favicon_id is always 0: the placeholder favicon is the only one served
    - site_url mirrors url: the site link is not tracked separately
    - is_spark always 0: Fever "sparks" (low-volume feeds) are not modelled
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fever_api.core.compose_fragments import PLACEHOLDER_FAVICON_ID
from fever_api.core.timestamps import to_unix
from fever_api.db.base import Base


class Feed(Base):
    """Feed entity: source of stories, optionally filed under a group."""
    __tablename__ = "feeds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False, unique=True)
    last_fetched: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    group_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("groups.id"), nullable=True,
    )

    group: Mapped[Optional["Group"]] = relationship(
        "Group", back_populates="feeds",
    )
    stories: Mapped[list["Story"]] = relationship(
        "Story", back_populates="feed", cascade="all, delete-orphan",
    )

    def as_fever_json(self) -> dict:
        return {
            "id": self.id,
            "favicon_id": PLACEHOLDER_FAVICON_ID,
            "title": self.name,
            "url": self.url,
            "site_url": self.url,
            "is_spark": 0,
            "last_updated_on_time": to_unix(self.last_fetched),
        }
