"""ORM Models: SQLAlchemy declarative models for Fever entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model rendered on the wire implements as_fever_json()

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from fever_api.models.group import Group  # noqa: F401
from fever_api.models.feed import Feed  # noqa: F401
from fever_api.models.story import Story  # noqa: F401
from fever_api.models.user import User  # noqa: F401
