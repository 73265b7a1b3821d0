"""Shared utilities for scoring and time handling."""

from .scores import days_since, exponential_decay, gaussian_fit, rank_weighted

__all__ = [
    "days_since",
    "exponential_decay",
    "gaussian_fit",
    "rank_weighted",
]
