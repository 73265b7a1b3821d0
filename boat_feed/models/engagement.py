"""
Engagement models: swipe events, the bounded swipe ledger, and the daily like counter.

The ledger is an explicit state object owned by the caller and passed into the
learner and orchestrator; nothing here is module-level state.
"""

from collections import deque
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .boat import Boat


class SwipeDirection(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"

    @classmethod
    def parse(cls, value: Union[str, "SwipeDirection"]) -> "SwipeDirection":
        """Accept 'accept'/'reject' as well as the UI's 'right'/'left'."""
        if isinstance(value, cls):
            return value
        aliases = {"right": cls.ACCEPT, "left": cls.REJECT, "like": cls.ACCEPT, "pass": cls.REJECT}
        key = str(value).strip().lower()
        if key in aliases:
            return aliases[key]
        return cls(key)


class BoatSnapshot(BaseModel):
    """Decision-relevant attributes of a boat at swipe time."""

    model_config = ConfigDict(frozen=True)

    builder: str = ""
    model: str = ""
    price: float = 0.0
    boat_type: Optional[str] = None
    boat_family: Optional[str] = None
    length: Optional[float] = None
    year_built: Optional[int] = None
    country: Optional[str] = None

    @classmethod
    def from_boat(cls, boat: Boat) -> "BoatSnapshot":
        return cls(
            builder=boat.builder,
            model=boat.model,
            price=boat.sell_price,
            boat_type=boat.boat_type,
            boat_family=boat.boat_families,
            length=boat.length,
            year_built=boat.year_built,
            country=boat.country,
        )


class SwipeEvent(BaseModel):
    """
    A single swipe decision. Created once per decision and never mutated.

    timestamp: epoch milliseconds (UTC) of the decision.
    """

    model_config = ConfigDict(frozen=True)

    boat_id: str
    direction: SwipeDirection
    timestamp: int
    boat: BoatSnapshot = Field(default_factory=BoatSnapshot)

    @property
    def accepted(self) -> bool:
        return self.direction is SwipeDirection.ACCEPT

    @property
    def decided_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


class SwipeStats(BaseModel):
    total_swipes: int
    likes: int
    passes: int
    like_rate: float


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class SwipeLedger:
    """
    Append-only, bounded log of swipe decisions.

    When the ledger exceeds its capacity the oldest events are dropped first.
    """

    def __init__(self, capacity: int = 500, events: Optional[Iterable[SwipeEvent]] = None):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._events: deque = deque(events or (), maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._events.maxlen

    def record(
        self,
        boat: Boat,
        direction: Union[str, SwipeDirection],
        timestamp: Optional[int] = None,
    ) -> SwipeEvent:
        """Append one decision for boat and return the stored event."""
        event = SwipeEvent(
            boat_id=boat.boat_id,
            direction=SwipeDirection.parse(direction),
            timestamp=timestamp if timestamp is not None else _now_ms(),
            boat=BoatSnapshot.from_boat(boat),
        )
        self._events.append(event)
        return event

    def append(self, event: SwipeEvent) -> None:
        self._events.append(event)

    def events(self) -> List[SwipeEvent]:
        """Snapshot of all events, oldest first."""
        return list(self._events)

    def accepted(self) -> List[SwipeEvent]:
        return [e for e in self._events if e.accepted]

    @property
    def total_swipes(self) -> int:
        return len(self._events)

    @property
    def likes(self) -> int:
        return sum(1 for e in self._events if e.accepted)

    def stats(self) -> SwipeStats:
        total = self.total_swipes
        likes = self.likes
        rate = round(likes / total * 100, 1) if total else 0.0
        return SwipeStats(total_swipes=total, likes=likes, passes=total - likes, like_rate=rate)

    def clear(self) -> None:
        self._events.clear()

    def to_list(self) -> List[Dict]:
        return [e.model_dump(mode="json") for e in self._events]

    @classmethod
    def from_list(cls, items: List[Dict], capacity: int = 500) -> "SwipeLedger":
        return cls(capacity=capacity, events=(SwipeEvent.model_validate(i) for i in items))

    def __len__(self) -> int:
        return len(self._events)


class DailyLikeCounter(BaseModel):
    """
    Accept decisions made on one calendar day (local date).

    The counter resets whenever the stored date differs from today.
    """

    day: Optional[date] = None
    count: int = 0
    cap: int = 10

    def _roll(self, today: date) -> None:
        if self.day != today:
            self.day = today
            self.count = 0

    def likes_today(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return self.count if self.day == today else 0

    def is_capped(self, today: Optional[date] = None) -> bool:
        return self.likes_today(today) >= self.cap

    def remaining(self, today: Optional[date] = None) -> int:
        return max(0, self.cap - self.likes_today(today))

    def register_like(self, today: Optional[date] = None) -> int:
        """Count one accept decision and return today's total."""
        self._roll(today or date.today())
        self.count += 1
        return self.count
