"""
Scoring model: ScoredBoat, a boat with its base score and exploration jitter.
"""

from pydantic import BaseModel

from .boat import Boat


class ScoredBoat(BaseModel):
    """A boat with all its ranking components."""

    boat: Boat
    base_score: float
    jitter: float = 0.0

    @property
    def final_score(self) -> float:
        """Sort key: base score plus phase-scaled jitter."""
        return self.base_score + self.jitter
