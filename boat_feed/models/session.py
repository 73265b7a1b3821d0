"""
Session model: per-user browsing state threaded through successive feed calls.
"""

from typing import Set

from pydantic import BaseModel, Field

from .config import FeedConfig


class FeedSession(BaseModel):
    """
    Browsing session for one user.

    seen_ids only grows: every boat handed to the UI is added once and never removed.
    page is the last 1-based catalog page requested.
    """

    user_id: str = ""
    seen_ids: Set[str] = Field(default_factory=set)
    page: int = 0

    def next_page(self) -> int:
        """Advance and return the page index for the next retrieval."""
        self.page += 1
        return self.page

    def needs_refill(self, buffered: int, config: FeedConfig) -> bool:
        """True when the UI's undisplayed buffer has dropped below the low-water mark."""
        return buffered < config.refill_low_water_mark

    def reset(self) -> None:
        self.seen_ids = set()
        self.page = 0
