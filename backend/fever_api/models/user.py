"""User ORM: holder of the registered Fever api_key.

Invariants:
    - The first row (lowest id) is "the" reader when no key is configured
    - api_key is stored exactly as clients send it (md5 hex), never normalized
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fever_api.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    api_key: Mapped[str | None] = mapped_column(String(64), nullable=True)
