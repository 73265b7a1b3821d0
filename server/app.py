"""
Boat Match Feed API: FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, logging, routes, and startup."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app = FastAPI(
        title="Boat Match Feed API",
        description="Adaptive swipe feed: exploration, default and personalized boat ranking",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup_logging():
        state = get_state()
        ok, errors = state.config.validate()
        for error in errors:
            print(f"[startup] WARNING: {error}", flush=True)
        print("Boat Match Feed API starting...", flush=True)
        print(f"[startup] Catalog: {state.config.catalog_source}", flush=True)
        print(
            f"[startup] Phases: exploration<{state.feed_config.exploration_swipe_limit} swipes, "
            f"personalized>={state.feed_config.personalized_min_likes} likes",
            flush=True,
        )
        print(f"[startup] Config valid: {ok}", flush=True)

    return app


app = create_app()
