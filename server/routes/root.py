"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Boat Match Feed API",
        "version": "1.0.0",
        "status": "ready",
        "catalog": type(state.catalog).__name__,
        "endpoints": {
            "feed": [
                "/api/feed/{user_id}/next",
                "/api/feed/{user_id}/swipe",
                "/api/feed/{user_id}/stats",
            ],
            "boats": ["/api/boats/{boat_id}"],
            "users": ["/api/users/{user_id}/contact"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    return {
        "status": "healthy",
        "catalog": type(state.catalog).__name__,
        "swipe_store": type(state.swipe_store).__name__,
        "notifier": type(state.notifier).__name__,
        "active_sessions": len(state.sessions),
    }
