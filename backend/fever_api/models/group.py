"""Group ORM: a named folder of feeds (Fever "group").

Invariants:
    - id is an integer primary key
    - name is non-nullable
    - as_fever_json() is the only shape a group takes on the wire

Design Decisions:
    - Feeds keep a nullable group_id: ungrouped feeds are still listed under `feeds`
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fever_api.db.base import Base


class Group(Base):
    """Group entity: folder that owns feeds."""
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    feeds: Mapped[list["Feed"]] = relationship(
        "Feed", back_populates="group",
    )

    def as_fever_json(self) -> dict:
        return {"id": self.id, "title": self.name}
