"""
Daily Recommendation Cache: one fetch per (calendar day, mood).

Keys:
- recommendations_<date>_<mood>  -> JSON category -> shuffled lists
- dailyRecommendationsDate / dailyRecommendations / dailyMood
  -> today's active mood selection, restored across restarts

Shuffle policy: every innermost list is shuffled once, when the entry is
written. Reads return the stored value unchanged, so repeated reads on the
same day are stable.
"""

from __future__ import annotations

import json
import random
from datetime import date
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from taste.core.errors import UpstreamError
from taste.core.logging import log_event
from taste.features.recommendations.store import STORE_ERRORS, KeyValueStore
from taste.models.recommendation import RecommendationResponse

T = TypeVar("T")

Recommendations = Dict[str, Any]
Fetcher = Callable[[str, Mapping[str, Sequence[str]]], Awaitable[Union[RecommendationResponse, Mapping[str, Any]]]]
CategoryViewed = Callable[[str], Awaitable[None]]

DAILY_DATE_KEY = "dailyRecommendationsDate"
DAILY_RECOMMENDATIONS_KEY = "dailyRecommendations"
DAILY_MOOD_KEY = "dailyMood"

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Fisher-Yates shuffle into a new list.

    Walks i from the last index down to 1 and swaps with j drawn
    uniformly from [0, i]. The input is left untouched.
    """
    rand = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rand.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_lists(value: Any, rng: Optional[random.Random] = None) -> Any:
    """Shuffle each innermost list independently, keeping the nesting."""
    if not isinstance(value, list):
        return value
    if any(isinstance(element, list) for element in value):
        return [shuffle_lists(element, rng) for element in value]
    return shuffle(value, rng)


def date_key(day: date) -> str:
    """Calendar date without time, e.g. 'Mon Oct 19 2026'. Names are fixed English, not locale."""
    return f"{_DAY_NAMES[day.weekday()]} {_MONTH_NAMES[day.month - 1]} {day.day:02d} {day.year}"


def cache_key(day: date, mood: str) -> str:
    return f"recommendations_{date_key(day)}_{mood}"


class DailyRecommendationCache:
    """
    Get-or-fetch cache for mood recommendations.

    Args:
        store: string key/value storage
        fetcher: default remote collaborator, called as fetcher(mood, preferences)
        on_category_viewed: awaited once per top-level category of a fresh response
        today: clock returning the local calendar date
        rng: random source for shuffling
    """

    def __init__(
        self,
        store: KeyValueStore,
        fetcher: Optional[Fetcher] = None,
        *,
        on_category_viewed: Optional[CategoryViewed] = None,
        today: Callable[[], date] = date.today,
        rng: Optional[random.Random] = None,
        user_id: Optional[str] = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.on_category_viewed = on_category_viewed
        self._today = today
        self._rng = rng
        self._user_id = user_id

    def key_for(self, mood: str) -> str:
        return cache_key(self._today(), mood)

    async def get_cached(self, mood: str) -> Optional[Recommendations]:
        try:
            raw = await self.store.get(self.key_for(mood))
        except STORE_ERRORS as exc:
            log_event("warning", "recommendations.cache_read_failed", request_id=None,
                      user_id=self._user_id, error_code="cache_unavailable", extra={"reason": str(exc)})
            return None
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except ValueError:
            log_event("warning", "recommendations.cache_corrupt", request_id=None,
                      user_id=self._user_id, error_code="cache_corrupt", extra={"mood": mood})
            return None
        return value if isinstance(value, dict) else None

    async def get_or_fetch(
        self,
        mood: str,
        preferences: Mapping[str, Sequence[str]],
        fetcher: Optional[Fetcher] = None,
    ) -> Recommendations:
        """
        Return today's recommendations for a mood, fetching at most once per day.

        On a miss the response is shuffled, written, then each category is
        signalled as viewed. Failures leave the cache untouched and return {}.
        """
        if not mood:
            return {}

        cached = await self.get_cached(mood)
        if cached is not None:
            log_event("info", "recommendations.cache_hit", request_id=None,
                      user_id=self._user_id, extra={"mood": mood})
            return cached

        fetch = fetcher or self.fetcher
        if fetch is None:
            log_event("error", "recommendations.fetcher_missing", request_id=None,
                      user_id=self._user_id, error_code="fetcher_missing", extra={"mood": mood})
            return {}

        response = await self._fetch(fetch, mood, preferences)
        if response is None:
            return {}

        processed = {
            category: shuffle_lists(lists, self._rng)
            for category, lists in response.recommendations.items()
        }
        try:
            await self.store.set(self.key_for(mood), json.dumps(processed))
            log_event("info", "recommendations.cache_write", request_id=None,
                      user_id=self._user_id, extra={"mood": mood, "categories": list(processed)})
        except STORE_ERRORS as exc:
            log_event("warning", "recommendations.cache_write_failed", request_id=None,
                      user_id=self._user_id, error_code="cache_unavailable", extra={"reason": str(exc)})

        if self.on_category_viewed is not None:
            for category in dict.fromkeys(processed):
                await self.on_category_viewed(category)

        return processed

    async def _fetch(
        self, fetch: Fetcher, mood: str, preferences: Mapping[str, Sequence[str]]
    ) -> Optional[RecommendationResponse]:
        try:
            raw = await fetch(mood, preferences)
            response = raw if isinstance(raw, RecommendationResponse) else RecommendationResponse.model_validate(raw)
        except (UpstreamError, httpx.HTTPError, PydanticValidationError, OSError) as exc:
            log_event("warning", "recommendations.fetch_failed", request_id=None,
                      user_id=self._user_id, error_code="upstream_unavailable",
                      extra={"mood": mood, "reason": str(exc)})
            return None
        if not response.ok:
            log_event("warning", "recommendations.fetch_unsuccessful", request_id=None,
                      user_id=self._user_id, error_code="upstream_status",
                      extra={"mood": mood, "status": response.status})
            return None
        return response

    async def remember_daily_selection(self, mood: str, recommendations: Recommendations) -> None:
        await self.store.set(DAILY_DATE_KEY, date_key(self._today()))
        await self.store.set(DAILY_RECOMMENDATIONS_KEY, json.dumps(recommendations))
        await self.store.set(DAILY_MOOD_KEY, mood)

    async def restore_daily_selection(self) -> Tuple[Optional[str], Recommendations]:
        """Today's mood and recommendations, or (None, {}) on a new day."""
        try:
            cached_date = await self.store.get(DAILY_DATE_KEY)
            cached_recommendations = await self.store.get(DAILY_RECOMMENDATIONS_KEY)
            cached_mood = await self.store.get(DAILY_MOOD_KEY)
            if cached_date == date_key(self._today()) and cached_recommendations and cached_mood:
                return cached_mood, json.loads(cached_recommendations)
        except (*STORE_ERRORS, ValueError) as exc:
            log_event("warning", "recommendations.restore_failed", request_id=None,
                      user_id=self._user_id, error_code="cache_unavailable", extra={"reason": str(exc)})
        return None, {}
