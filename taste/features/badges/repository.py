"""
Badge document repository.

The per-user badge document is {badge_id: {progress, unlocked, last_updated}}
plus the activity counters that feed the triggers. Writes are partial:
merging one badge never touches the others.

Implementations:
- InMemoryBadgeRepository: dict-backed, used in tests and local runs
- SqlBadgeRepository: one row per (user, badge), written with an upsert
"""

from __future__ import annotations

import asyncio
import copy
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from taste.core.config import settings
from taste.core.database import badge_activity, badge_states, get_db_session, get_engine

# Failures a repository backend may raise on read or write
REPOSITORY_ERRORS = (SQLAlchemyError, OSError)


class BadgeRepository(ABC):
    """Async port over the badge document store."""

    @abstractmethod
    async def get_badge_state(self, user_id: str) -> Optional[Dict[str, Dict[str, Any]]]:
        """Return the badge document, or None when the user has none yet."""

    @abstractmethod
    async def merge_badge_state(self, user_id: str, partial: Mapping[str, Mapping[str, Any]]) -> None:
        """Merge {badge_id: fields} into the document, creating it if absent."""

    @abstractmethod
    async def get_activity(self, user_id: str) -> Optional[Dict[str, Any]]: ...

    @abstractmethod
    async def merge_activity(self, user_id: str, partial: Mapping[str, Any]) -> None: ...


class InMemoryBadgeRepository(BadgeRepository):
    def __init__(self):
        self._badges: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._activity: Dict[str, Dict[str, Any]] = {}

    async def get_badge_state(self, user_id: str) -> Optional[Dict[str, Dict[str, Any]]]:
        doc = self._badges.get(user_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def merge_badge_state(self, user_id: str, partial: Mapping[str, Mapping[str, Any]]) -> None:
        doc = self._badges.setdefault(user_id, {})
        for badge_id, fields in partial.items():
            doc.setdefault(badge_id, {}).update(fields)

    async def get_activity(self, user_id: str) -> Optional[Dict[str, Any]]:
        activity = self._activity.get(user_id)
        return copy.deepcopy(activity) if activity is not None else None

    async def merge_activity(self, user_id: str, partial: Mapping[str, Any]) -> None:
        self._activity.setdefault(user_id, {}).update(copy.deepcopy(dict(partial)))


class SqlBadgeRepository(BadgeRepository):
    """
    SQLAlchemy-backed repository.

    Each badge is its own row keyed by (user_id, badge_id), so a merge is a
    single-row upsert: two different badges never contend, and the same
    badge is last-writer-wins at the row level instead of a read-merge-write
    of the whole document. Blocking calls run in a worker thread.
    """

    def __init__(self, engine=None):
        self._engine = engine

    @property
    def engine(self):
        return self._engine or get_engine()

    def _insert(self, table):
        if self.engine.dialect.name == "postgresql":
            return postgresql.insert(table)
        return sqlite.insert(table)

    async def get_badge_state(self, user_id: str) -> Optional[Dict[str, Dict[str, Any]]]:
        return await asyncio.to_thread(self._get_badge_state, user_id)

    def _get_badge_state(self, user_id: str) -> Optional[Dict[str, Dict[str, Any]]]:
        with get_db_session(self.engine) as session:
            rows = session.execute(
                select(badge_states).where(badge_states.c.user_id == user_id)
            ).mappings().all()
        if not rows:
            return None
        return {
            row["badge_id"]: {
                "progress": row["progress"],
                "unlocked": bool(row["unlocked"]),
                "last_updated": row["last_updated"],
            }
            for row in rows
        }

    async def merge_badge_state(self, user_id: str, partial: Mapping[str, Mapping[str, Any]]) -> None:
        await asyncio.to_thread(self._merge_badge_state, user_id, partial)

    def _merge_badge_state(self, user_id: str, partial: Mapping[str, Mapping[str, Any]]) -> None:
        with get_db_session(self.engine) as session:
            for badge_id, fields in partial.items():
                values = {k: fields[k] for k in ("progress", "unlocked", "last_updated") if k in fields}
                values.setdefault("last_updated", datetime.now(timezone.utc))
                stmt = self._insert(badge_states).values(user_id=user_id, badge_id=badge_id, **values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[badge_states.c.user_id, badge_states.c.badge_id],
                    set_=values,
                )
                session.execute(stmt)

    async def get_activity(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(self._get_activity, user_id)

    def _get_activity(self, user_id: str) -> Optional[Dict[str, Any]]:
        with get_db_session(self.engine) as session:
            row = session.execute(
                select(badge_activity).where(badge_activity.c.user_id == user_id)
            ).mappings().first()
        if row is None:
            return None
        return {
            "observed_categories": list(row["observed_categories"] or []),
            "likes_count": row["likes_count"],
            "active_dates": list(row["active_dates"] or []),
        }

    async def merge_activity(self, user_id: str, partial: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._merge_activity, user_id, partial)

    def _merge_activity(self, user_id: str, partial: Mapping[str, Any]) -> None:
        values = {
            k: partial[k] for k in ("observed_categories", "likes_count", "active_dates") if k in partial
        }
        values["updated_at"] = datetime.now(timezone.utc)
        with get_db_session(self.engine) as session:
            stmt = self._insert(badge_activity).values(
                user_id=user_id,
                observed_categories=values.get("observed_categories", []),
                likes_count=values.get("likes_count", 0),
                active_dates=values.get("active_dates", []),
                updated_at=values["updated_at"],
            )
            stmt = stmt.on_conflict_do_update(index_elements=[badge_activity.c.user_id], set_=values)
            session.execute(stmt)


def build_repository(kind: Optional[str] = None) -> BadgeRepository:
    kind = kind or settings.BADGE_STORE
    if kind == "sql":
        return SqlBadgeRepository()
    return InMemoryBadgeRepository()
