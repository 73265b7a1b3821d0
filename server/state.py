"""Application state: catalog, stores, notifier and per-user feed sessions."""

from typing import Any, Dict, Optional

import numpy as np

from boat_feed.models.boat import Boat
from boat_feed.models.session import FeedSession

from .config import ServerConfig, get_config
from .services import (
    HttpBrokerNotifier,
    HttpCatalogSource,
    InMemorySwipeStore,
    JsonCatalogSource,
    JsonSwipeStore,
    LoggingNotifier,
)


class AppState:
    """Global application state."""

    def __init__(
        self,
        config: ServerConfig,
        catalog: Optional[Any] = None,
        swipe_store: Optional[Any] = None,
        notifier: Optional[Any] = None,
        jitter: bool = True,
        seed: Optional[int] = None,
    ):
        self.config = config
        self.feed_config = config.load_feed_config()

        self.catalog = catalog if catalog is not None else self._create_catalog(config)
        print(f"[startup] Catalog source: {type(self.catalog).__name__}")
        self.swipe_store = swipe_store if swipe_store is not None else self._create_swipe_store(config)
        print(f"[startup] Swipe store: {type(self.swipe_store).__name__}")
        self.notifier = notifier if notifier is not None else self._create_notifier(config)
        print(f"[startup] Notifier: {type(self.notifier).__name__}")

        # None disables jitter and the diversity bonus
        self.rng: Optional[np.random.Generator] = np.random.default_rng(seed) if jitter else None

        # Session storage: browsing state and the boats served to each user
        self.sessions: Dict[str, FeedSession] = {}
        self.served: Dict[str, Dict[str, Boat]] = {}

    def _create_catalog(self, config: ServerConfig) -> Any:
        """Create catalog source from config (JSON file or HTTP API)."""
        if config.catalog_source == "json" and config.catalog_json_path:
            return JsonCatalogSource(config.catalog_json_path)
        return HttpCatalogSource(
            config.catalog_api_url,
            token=config.catalog_api_token,
            timeout=config.catalog_timeout_seconds,
        )

    def _create_swipe_store(self, config: ServerConfig) -> Any:
        if config.swipes_json_path:
            return JsonSwipeStore(config.swipes_json_path, self.feed_config)
        return InMemorySwipeStore(self.feed_config)

    def _create_notifier(self, config: ServerConfig) -> Any:
        if config.contact_api_url:
            return HttpBrokerNotifier(
                config.contact_api_url,
                config.default_broker_email,
                timeout=config.catalog_timeout_seconds,
            )
        return LoggingNotifier(config.default_broker_email)

    def session_for(self, user_id: str) -> FeedSession:
        if user_id not in self.sessions:
            self.sessions[user_id] = FeedSession(user_id=user_id)
        return self.sessions[user_id]

    def remember_served(self, user_id: str, boats) -> None:
        """Keep served boats so a later swipe can snapshot them without a catalog call."""
        served = self.served.setdefault(user_id, {})
        for boat in boats:
            served[boat.boat_id] = boat

    def served_boat(self, user_id: str, boat_id: str) -> Optional[Boat]:
        return self.served.get(user_id, {}).get(boat_id)

    def reset_user(self, user_id: str) -> None:
        """Forget swipes, seen-set and paging for a user."""
        self.swipe_store.reset(user_id)
        self.sessions.pop(user_id, None)
        self.served.pop(user_id, None)


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (tests, embedding the app in another process)."""
    global _state
    _state = state
