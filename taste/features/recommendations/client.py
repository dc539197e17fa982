"""
Remote recommendation service client.

Two endpoints, both JSON over POST:
- /daily-recommendations  {mood, preferences} -> {status, recommendations?}
- /get-item-details       {name, category}    -> {status, details?}

fetch_recommendations raises UpstreamError on any failure so the cache
can decide what to keep; fetch_item_details never raises and returns a
sentinel {"error": ...} payload instead.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from taste.core.config import settings
from taste.core.errors import UpstreamError
from taste.core.logging import log_event
from taste.models.recommendation import (
    ItemDetailRequest,
    ItemDetailResponse,
    RecommendationRequest,
    RecommendationResponse,
)

logger = logging.getLogger("taste")

NO_DETAILS = {"error": "No details available for this item"}
DETAILS_FAILED = {"error": "Failed to load item details"}


def normalize_details(details: Mapping[str, Any]) -> dict[str, Any]:
    """Rename the upstream `genrre` typo to `genre` (never keep both keys)."""
    processed = dict(details)
    if "genrre" in processed:
        typo = processed.pop("genrre")
        processed.setdefault("genre", typo)
    return processed


class RecommendationClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.RECOMMENDATIONS_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.RECOMMENDATIONS_TIMEOUT_SECONDS

    async def _post(self, path: str, body: dict) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.base_url}{path}", json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{path} failed: {exc.__class__.__name__}") from exc
        except ValueError as exc:
            raise UpstreamError(f"{path} returned malformed JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamError(f"{path} returned an unexpected shape")
        return data

    async def fetch_recommendations(
        self, mood: str, preferences: Mapping[str, Sequence[str]]
    ) -> RecommendationResponse:
        request = RecommendationRequest(
            mood=mood, preferences={k: list(v) for k, v in preferences.items()}
        )
        data = await self._post("/daily-recommendations", request.model_dump())
        try:
            return RecommendationResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise UpstreamError("/daily-recommendations returned an unexpected shape") from exc

    async def fetch_item_details(self, name: str, category: str) -> dict[str, Any]:
        request = ItemDetailRequest(name=name, category=category)
        try:
            data = await self._post("/get-item-details", request.model_dump())
            response = ItemDetailResponse.model_validate(data)
        except (UpstreamError, PydanticValidationError) as exc:
            log_event(
                "warning",
                "recommendations.details_failed",
                request_id=None,
                error_code="upstream_unavailable",
                extra={"item": name, "category": category, "reason": str(exc)},
            )
            return dict(DETAILS_FAILED)

        if response.status == "success" and response.details:
            return normalize_details(response.details)
        return dict(NO_DETAILS)

    async def __call__(self, mood: str, preferences: Mapping[str, Sequence[str]]) -> RecommendationResponse:
        return await self.fetch_recommendations(mood, preferences)
