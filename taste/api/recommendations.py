"""
Recommendation API Routes

Endpoints:
1. POST /v1/recommendations/mood - Today's recommendations for a mood
2. POST /v1/recommendations/details - Details for one recommended item
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from taste.features.session.registry import SessionRegistry, get_sessions


router = APIRouter(prefix="/v1/recommendations")


class MoodRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    mood: str = Field(..., min_length=1)
    preferences: dict[str, list[str]] = Field(default_factory=dict)


class DetailsRequest(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


@router.post("/mood")
async def select_mood(
    request: MoodRequest,
    sessions: SessionRegistry = Depends(get_sessions),
) -> dict:
    """
    Vote a mood and load recommendations (fetched at most once per day and mood).

    Response:
        { mood, recommendations: {category: [...]}, available: bool }
    """
    context = await sessions.get(request.user_id)
    if request.preferences:
        context.preferences = {k: list(v) for k, v in request.preferences.items()}
    recommendations = await context.select_mood(request.mood)
    return {
        "mood": request.mood,
        "recommendations": recommendations,
        "available": bool(recommendations),
    }


@router.post("/details")
async def item_details(
    request: DetailsRequest,
    sessions: SessionRegistry = Depends(get_sessions),
) -> dict:
    return await sessions.client.fetch_item_details(request.name, request.category)
