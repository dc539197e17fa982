"""
Badge API Routes

Endpoints:
1. GET /v1/badges?user_id=... - Badge list merged over the registry
2. POST /v1/badges/events - Report a user action and get the updated badges

Events: category_view (needs category), play, mood_vote, share,
like (optional likes_count total), daily_login.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from taste.core.errors import ValidationError
from taste.core.logging import log_event
from taste.features.badges.service import BadgeEngine
from taste.features.session.registry import SessionRegistry, get_sessions


router = APIRouter(prefix="/v1/badges")

EVENTS = ("category_view", "play", "mood_vote", "share", "like", "daily_login")


class BadgeEventRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    event: str = Field(..., min_length=1)
    category: Optional[str] = None
    likes_count: Optional[int] = Field(default=None, ge=0)


async def _apply_event(engine: BadgeEngine, request: BadgeEventRequest) -> None:
    if request.event == "category_view":
        if not request.category:
            raise ValidationError("category is required for category_view")
        await engine.track_category_view(request.category)
    elif request.event == "play":
        await engine.trigger_daily_listener()
    elif request.event == "mood_vote":
        await engine.trigger_cultural_critic()
    elif request.event == "share":
        await engine.trigger_social_butterfly()
    elif request.event == "like":
        if request.likes_count is None:
            await engine.track_like()
        else:
            await engine.trigger_curator(request.likes_count)
    elif request.event == "daily_login":
        await engine.track_daily_login()


@router.get("")
async def list_badges(
    user_id: str = Query(..., min_length=1),
    sessions: SessionRegistry = Depends(get_sessions),
) -> dict:
    context = await sessions.get(user_id)
    return {"badges": [b.model_dump() for b in context.badges.badges]}


@router.post("/events")
async def record_event(
    request: BadgeEventRequest,
    sessions: SessionRegistry = Depends(get_sessions),
) -> dict:
    """
    Apply one badge event.

    Response:
        { badges: [...], unlocked: [ids unlocked by this event, incl. Badge Hunter] }
    """
    if request.event not in EVENTS:
        raise ValidationError(f"Unknown badge event: {request.event}", code="unknown_event")

    context = await sessions.get(request.user_id)
    engine = context.badges
    before = {b.id for b in engine.badges if b.unlocked}
    await _apply_event(engine, request)
    unlocked = [b.id for b in engine.badges if b.unlocked and b.id not in before]

    log_event("info", "badges.event", request_id=None, user_id=request.user_id,
              event_type=request.event, extra={"unlocked": unlocked})
    return {"badges": [b.model_dump() for b in engine.badges], "unlocked": unlocked}
