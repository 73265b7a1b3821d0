"""Feed endpoints: next batch, swipe, stats, reset."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException

from boat_feed.models.boat import Boat, parse_boats
from boat_feed.models.engagement import SwipeDirection
from boat_feed.stages.learner import learn_preferences
from boat_feed.stages.orchestrator import next_feed_batch
from boat_feed.stages.phase import resolve_phase

from ..models import FeedResponse, NextBatchRequest, StatsResponse, SwipeRequest, SwipeResponse
from ..services import UserActivity
from ..state import AppState, get_state
from ..utils import to_boat_card

logger = logging.getLogger(__name__)

router = APIRouter()


def _stats(user_id: str, activity: UserActivity, state: AppState) -> StatsResponse:
    ledger = activity.ledger
    learned = learn_preferences(ledger, state.feed_config)
    phase = resolve_phase(ledger.total_swipes, ledger.likes, learned, state.feed_config)
    stats = ledger.stats()
    return StatsResponse(
        user_id=user_id,
        phase=phase.value,
        total_swipes=stats.total_swipes,
        likes=stats.likes,
        passes=stats.passes,
        like_rate=stats.like_rate,
        likes_today=activity.daily_likes.likes_today(),
        remaining_likes=activity.daily_likes.remaining(),
    )


def _resolve_boat(state: AppState, user_id: str, boat_id: str) -> Optional[Boat]:
    """Boat from this user's served cards, else from the catalog detail endpoint."""
    boat = state.served_boat(user_id, boat_id)
    if boat is not None:
        return boat
    record = state.catalog.fetch_detail(boat_id)
    if not record:
        return None
    boats = parse_boats([record])
    return boats[0] if boats else None


@router.post("/{user_id}/next", response_model=FeedResponse)
def next_batch(user_id: str, request: NextBatchRequest = None):
    """Fetch, rank and dedup the next batch of boats for this user."""
    request = request or NextBatchRequest()
    state = get_state()
    activity = state.swipe_store.get(user_id)
    session = state.session_for(user_id)

    batch = next_feed_batch(
        state.catalog,
        activity.ledger,
        session,
        config=state.feed_config,
        rng=state.rng,
        page=request.page,
    )
    state.remember_served(user_id, [s.boat for s in batch.boats])

    now = datetime.now(timezone.utc)
    cards = [to_boat_card(s, queue_position=i + 1, now=now) for i, s in enumerate(batch.boats)]
    buffered = request.buffered + len(cards)
    return FeedResponse(
        user_id=user_id,
        boats=cards,
        phase=batch.phase.value,
        page=batch.page,
        fetched_page=batch.fetched_page,
        filters=batch.filters,
        step=batch.step,
        attempts=batch.attempts,
        synthetic=batch.synthetic,
        end_of_stream=batch.end_of_stream,
        needs_refill=session.needs_refill(buffered, state.feed_config),
    )


@router.post("/{user_id}/swipe", response_model=SwipeResponse)
def swipe(user_id: str, request: SwipeRequest):
    """Record a swipe. Accepts count against the daily cap and notify the broker."""
    state = get_state()
    activity = state.swipe_store.get(user_id)
    boat = _resolve_boat(state, user_id, request.boat_id)
    if boat is None:
        raise HTTPException(status_code=404, detail="Boat not found")

    accepted = request.direction is SwipeDirection.ACCEPT
    if accepted and activity.daily_likes.is_capped():
        raise HTTPException(status_code=429, detail="Daily like limit reached")

    activity.ledger.record(boat, request.direction)
    notified = False
    if accepted:
        activity.daily_likes.register_like()
        if activity.contact is not None:
            notified = state.notifier.notify_interest(boat, activity.contact)
        else:
            logger.warning("[feed] NO_CONTACT user=%s boat_id=%s", user_id, boat.boat_id)
    state.swipe_store.save(user_id, activity)

    return SwipeResponse(
        boat_id=boat.boat_id,
        direction=request.direction,
        notified=notified,
        stats=_stats(user_id, activity, state),
    )


@router.get("/{user_id}/stats", response_model=StatsResponse)
def get_stats(user_id: str):
    state = get_state()
    return _stats(user_id, state.swipe_store.get(user_id), state)


@router.delete("/{user_id}")
def reset_feed(user_id: str):
    """Clear swipes, daily likes, seen-set and paging; keep the contact identity."""
    state = get_state()
    state.reset_user(user_id)
    logger.info("[feed] RESET user=%s", user_id)
    return {"status": "reset", "user_id": user_id}
