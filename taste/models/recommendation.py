"""Request/response contracts of the remote recommendation service."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class RecommendationRequest(BaseModel):
    mood: str = Field(..., min_length=1)
    preferences: dict[str, list[str]] = Field(default_factory=dict)


class RecommendationResponse(BaseModel):
    status: str
    # category -> list of items, or list of lists (one per sub-variant)
    recommendations: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success" and isinstance(self.recommendations, dict)


class ItemDetailRequest(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class ItemDetailResponse(BaseModel):
    status: str
    details: Optional[dict[str, Any]] = None
