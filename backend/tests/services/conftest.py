"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - get_clock pinned to 123456789 so envelopes compare exactly
    - get_key_lookup overridden with the key "apisecretkey"
    - db_manager patched for the readiness probe, which bypasses get_db

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the fixture session
      and the request session see the same tables and rows
    - Seed helpers create ORM rows directly; no HTTP authoring interface exists
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from fever_api.api.routes.fever_endpoint import get_clock, get_key_lookup
from fever_api.db.base import Base
from fever_api.infrastructure.database import get_db, DatabaseSessionManager
from fever_api.models import Feed, Group, Story
from fever_api.services.key_lookup import RegisteredKeyLookup
import fever_api.infrastructure.database as db_module
from fever_api.main import app

API_KEY = "apisecretkey"
NOW = 123456789


class FixedClock:
    def __init__(self, now: int = NOW):
        self._now = now

    def now(self) -> int:
        return self._now


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB, clock and key lookup overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: FixedClock()
    app.dependency_overrides[get_key_lookup] = lambda: RegisteredKeyLookup(None, API_KEY)

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed(test_db):
    """Two groups, three feeds, four stories with mixed read/starred state.

    Layout:
        group "Tech" (g1): feeds f1, f2
        group "Art"  (g2): feed f3
        ungrouped:         feed f4
        s1 f1 unread, s2 f1 unread+starred, s3 f2 read+starred, s4 f3 unread
    """
    tech = Group(name="Tech")
    art = Group(name="Art")
    test_db.add_all([tech, art])
    await test_db.flush()

    f1 = Feed(name="Alpha", url="http://alpha.test/rss", group_id=tech.id,
              last_fetched=datetime(2024, 1, 1, tzinfo=timezone.utc))
    f2 = Feed(name="beta", url="http://beta.test/rss", group_id=tech.id)
    f3 = Feed(name="Gamma", url="http://gamma.test/rss", group_id=art.id)
    f4 = Feed(name="Delta", url="http://delta.test/rss")
    test_db.add_all([f1, f2, f3, f4])
    await test_db.flush()

    def story(feed, title, hour, **kwargs):
        stamp = datetime(2024, 1, 1, hour, tzinfo=timezone.utc)
        return Story(
            feed_id=feed.id, title=title, permalink=f"http://x.test/{title}",
            body=f"<p>{title}</p>", source="Author", published=stamp,
            created_at=stamp, **kwargs,
        )

    s1 = story(f1, "one", 1)
    s2 = story(f1, "two", 2, is_starred=True)
    s3 = story(f2, "three", 3, is_read=True, is_starred=True)
    s4 = story(f3, "four", 4)
    test_db.add_all([s1, s2, s3, s4])
    await test_db.commit()

    return {
        "groups": {"tech": tech, "art": art},
        "feeds": {"f1": f1, "f2": f2, "f3": f3, "f4": f4},
        "stories": {"s1": s1, "s2": s2, "s3": s3, "s4": s4},
    }
