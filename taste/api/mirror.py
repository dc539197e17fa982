"""
Mirror API Routes

POST /v1/mirror - Reflect quiz answers against one archetype
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from taste.core.errors import NotFoundError
from taste.features.archetypes.engine import resolve
from taste.features.archetypes.registry import get_archetype
from taste.features.mirror.engine import classify


router = APIRouter(prefix="/v1/mirror")


class MirrorRequest(BaseModel):
    archetype: str = Field(..., min_length=1)
    preferences: dict[str, list[str]] = Field(default_factory=dict)
    seed: Optional[int] = Field(default=None, ge=0)


@router.post("")
async def mirror(request: MirrorRequest) -> dict:
    archetype = get_archetype(request.archetype)
    if archetype is None:
        raise NotFoundError(f"Unknown archetype: {request.archetype}")
    reflection = classify(resolve(request.preferences, archetype), archetype, seed=request.seed)
    return reflection.model_dump()
