"""
Swipe store: per-user swipe ledger, daily like counter and contact identity.

Implementations: in-memory (local runs, tests) and JSON file (SWIPES_JSON_PATH).
The engine itself never touches the store; routes load a UserActivity, hand its
ledger to the orchestrator and save it back.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from pydantic import ValidationError

from boat_feed.models.config import DEFAULT_CONFIG, FeedConfig
from boat_feed.models.engagement import DailyLikeCounter, SwipeLedger

from ..models.users import ContactIdentity

logger = logging.getLogger(__name__)


@dataclass
class UserActivity:
    """Everything the feed remembers about one user."""

    ledger: SwipeLedger
    daily_likes: DailyLikeCounter
    contact: Optional[ContactIdentity] = None

    @classmethod
    def empty(cls, config: FeedConfig = DEFAULT_CONFIG) -> "UserActivity":
        return cls(
            ledger=SwipeLedger(capacity=config.ledger_capacity),
            daily_likes=DailyLikeCounter(cap=config.daily_like_cap),
        )

    def to_dict(self) -> Dict:
        return {
            "swipes": self.ledger.to_list(),
            "daily_likes": self.daily_likes.model_dump(mode="json"),
            "contact": self.contact.model_dump() if self.contact else None,
        }

    @classmethod
    def from_dict(cls, data: Dict, config: FeedConfig = DEFAULT_CONFIG) -> "UserActivity":
        contact = data.get("contact")
        daily = DailyLikeCounter.model_validate(data.get("daily_likes") or {})
        daily.cap = config.daily_like_cap
        return cls(
            ledger=SwipeLedger.from_list(data.get("swipes") or [], capacity=config.ledger_capacity),
            daily_likes=daily,
            contact=ContactIdentity.model_validate(contact) if contact else None,
        )


class SwipeStore(Protocol):
    """Protocol for per-user activity persistence."""

    def get(self, user_id: str) -> UserActivity:
        """Return the user's activity, creating an empty record on first use."""
        ...

    def save(self, user_id: str, activity: UserActivity) -> None:
        ...

    def reset(self, user_id: str) -> None:
        """Forget swipes and daily likes; the contact identity is kept."""
        ...


class InMemorySwipeStore:
    """Activity held in process memory only."""

    def __init__(self, config: FeedConfig = DEFAULT_CONFIG):
        self._config = config
        self._users: Dict[str, UserActivity] = {}

    def get(self, user_id: str) -> UserActivity:
        if user_id not in self._users:
            self._users[user_id] = UserActivity.empty(self._config)
        return self._users[user_id]

    def save(self, user_id: str, activity: UserActivity) -> None:
        self._users[user_id] = activity

    def reset(self, user_id: str) -> None:
        activity = self.get(user_id)
        activity.ledger.clear()
        activity.daily_likes = DailyLikeCounter(cap=self._config.daily_like_cap)


class JsonSwipeStore(InMemorySwipeStore):
    """Activity mirrored to a JSON file (e.g. data/swipes.json) on every save."""

    def __init__(self, path: Union[Path, str], config: FeedConfig = DEFAULT_CONFIG):
        super().__init__(config)
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("[swipes] LOAD_FAILED path=%s error=%s", self._path, e)
            return
        for user_id, raw in (data.get("users") or {}).items():
            try:
                self._users[user_id] = UserActivity.from_dict(raw, self._config)
            except ValidationError as e:
                logger.warning("[swipes] SKIP_USER user=%s error=%s", user_id, e)

    def _save(self) -> None:
        out = {"users": {uid: a.to_dict() for uid, a in self._users.items()}}
        with open(self._path, "w") as f:
            json.dump(out, f, indent=2)

    def save(self, user_id: str, activity: UserActivity) -> None:
        super().save(user_id, activity)
        self._save()

    def reset(self, user_id: str) -> None:
        super().reset(user_id)
        self._save()
