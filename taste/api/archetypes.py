"""
Archetype API Routes

Endpoints:
1. GET /v1/archetypes - Static archetype registry and quiz categories
2. POST /v1/archetypes/rank - Rank archetypes for a set of quiz answers
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from taste.features.archetypes.engine import rank_archetypes
from taste.features.archetypes.registry import ARCHETYPES, QUIZ_CATEGORIES


router = APIRouter(prefix="/v1/archetypes")


class RankRequest(BaseModel):
    preferences: dict[str, list[str]] = Field(default_factory=dict)


@router.get("")
async def list_archetypes() -> dict:
    return {
        "archetypes": [a.model_dump() for a in ARCHETYPES],
        "categories": [c.model_dump() for c in QUIZ_CATEGORIES],
    }


@router.post("/rank")
async def rank(request: RankRequest) -> dict:
    """
    Rank every archetype by summed affinity.

    Response:
        { matches: [{archetype, total, resonance}, ...] } highest total first
    """
    matches = rank_archetypes(request.preferences)
    return {"matches": [m.model_dump() for m in matches]}
