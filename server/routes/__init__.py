"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .boats import router as boats_router
from .feed import router as feed_router
from .root import router as root_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(feed_router, prefix="/api/feed", tags=["feed"])
    app.include_router(boats_router, prefix="/api/boats", tags=["boats"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
