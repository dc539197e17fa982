# taste/conftest.py
import sys
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Add project root to PYTHONPATH
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeFetcher:
    """Recommendation collaborator that records calls and replays a fixed payload."""

    def __init__(self, payload=None, *, error: Exception | None = None):
        self.payload = payload if payload is not None else {
            "status": "success",
            "recommendations": {
                "music": [["a", "b", "c", "d"], ["e", "f"]],
                "movies": ["m1", "m2", "m3"],
                "books": ["b1", "b2"],
                "podcasts": ["p1", "p2", "p3"],
            },
        }
        self.error = error
        self.calls = []

    async def __call__(self, mood, preferences):
        self.calls.append((mood, dict(preferences)))
        if self.error is not None:
            raise self.error
        return self.payload


class FixedClock:
    def __init__(self, day: date):
        self.day = day

    def __call__(self) -> date:
        return self.day


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def fetcher_factory():
    return FakeFetcher


@pytest.fixture
def clock():
    return FixedClock(date(2026, 10, 19))


@pytest.fixture
def sqlite_engine():
    """
    Shared in-memory SQLite engine with the badge tables created.

    StaticPool keeps one connection so worker threads see the same database.
    """
    from taste.core.database import create_all_tables

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sessions(fake_fetcher):
    """Install an in-memory session registry for the HTTP surface."""
    from taste.features.badges.repository import InMemoryBadgeRepository
    from taste.features.recommendations.client import RecommendationClient
    from taste.features.recommendations.store import InMemoryKeyValueStore
    from taste.features.session.registry import SessionRegistry, set_sessions

    registry = SessionRegistry(
        repository=InMemoryBadgeRepository(),
        store=InMemoryKeyValueStore(),
        client=RecommendationClient(base_url="http://recs.test", timeout=1.0),
        fetcher=fake_fetcher,
    )
    set_sessions(registry)
    yield registry
    set_sessions(None)
