"""Story ORM: one entry of a feed (Fever "item").

Invariants:
    - Always belongs to a Feed (feed_id FK)
    - is_read / is_starred are the only mutable reading state
    - created_at is when the story was stored; mark-before-timestamp compares against it
    - published is the feed's own date; exported as created_on_time

Design Decisions:
    - Booleans stored natively, rendered as 0/1 because Fever clients expect integers
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fever_api.core.timestamps import to_unix
from fever_api.db.base import Base


class Story(Base):
    """Story entity: readable item with read/starred state."""
    __tablename__ = "stories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    feed_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("feeds.id"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    permalink: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    source: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True,
    )
    is_starred: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    feed: Mapped["Feed"] = relationship("Feed", back_populates="stories")

    def as_fever_json(self) -> dict:
        return {
            "id": self.id,
            "feed_id": self.feed_id,
            "title": self.title,
            "author": self.source,
            "html": self.body,
            "url": self.permalink,
            "is_saved": 1 if self.is_starred else 0,
            "is_read": 1 if self.is_read else 0,
            "created_on_time": to_unix(self.published),
        }
