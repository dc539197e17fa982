"""
Per-user TasteContext registry for the HTTP surface.

One context per (user id, calendar day), created lazily and shared by every
request for that user so badge edges and the day cache behave like a single
session. Each context sees the day store through a user-scoped prefix. A new
day opens a fresh context, which restores that day's selection and carries
the user's preferences and archetype forward. The least recently used
contexts are dropped once `max_contexts` is exceeded.

The repository, day store and recommendation client are built from
settings on first use; tests swap the whole registry via set_sessions().
"""

import asyncio
from collections import OrderedDict
from datetime import date
from typing import Callable, Optional, Tuple

from taste.core.config import settings
from taste.core.logging import log_event
from taste.features.badges.repository import BadgeRepository, build_repository
from taste.features.recommendations.cache import Fetcher
from taste.features.recommendations.client import RecommendationClient
from taste.features.recommendations.store import KeyValueStore, build_store, user_scope
from taste.features.session.context import TasteContext


class SessionRegistry:
    def __init__(
        self,
        repository: Optional[BadgeRepository] = None,
        store: Optional[KeyValueStore] = None,
        client: Optional[RecommendationClient] = None,
        fetcher: Optional[Fetcher] = None,
        *,
        today: Callable[[], date] = date.today,
        max_contexts: Optional[int] = None,
    ):
        self.repository = repository or build_repository()
        self.store = store or build_store()
        self.client = client or RecommendationClient()
        self.fetcher = fetcher or self.client
        self.today = today
        self.max_contexts = max_contexts or settings.SESSION_CACHE_SIZE
        self._contexts: "OrderedDict[str, Tuple[date, TasteContext]]" = OrderedDict()
        self._lock = asyncio.Lock()

    @property
    def open_contexts(self) -> int:
        return len(self._contexts)

    async def get(self, user_id: str) -> TasteContext:
        day = self.today()
        async with self._lock:
            entry = self._contexts.get(user_id)
            if entry is not None and entry[0] == day:
                self._contexts.move_to_end(user_id)
                return entry[1]

            previous = entry[1] if entry is not None else None
            context = await TasteContext.open(
                repository=self.repository,
                store=user_scope(self.store, user_id),
                fetcher=self.fetcher,
                user_id=user_id,
                preferences=previous.preferences if previous else None,
                archetype=previous.archetype.name if previous and previous.archetype else None,
                today=self.today,
            )
            if previous is not None:
                log_event("info", "sessions.day_rollover", request_id=None, user_id=user_id,
                          extra={"day": day.isoformat()})
            self._contexts[user_id] = (day, context)
            self._contexts.move_to_end(user_id)
            while len(self._contexts) > self.max_contexts:
                evicted, _ = self._contexts.popitem(last=False)
                log_event("info", "sessions.evicted", request_id=None, user_id=evicted)
            return context

    async def close(self) -> None:
        self._contexts.clear()
        await self.store.close()


_sessions: Optional[SessionRegistry] = None


def get_sessions() -> SessionRegistry:
    global _sessions
    if _sessions is None:
        _sessions = SessionRegistry()
    return _sessions


def set_sessions(registry: Optional[SessionRegistry]) -> None:
    global _sessions
    _sessions = registry


async def close_sessions() -> None:
    global _sessions
    if _sessions is not None:
        await _sessions.close()
    _sessions = None
