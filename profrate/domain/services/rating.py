"""Aggregate rating over a professor's current reviews.

Pure functions only. The cached overall rating is always re-derived from the
full review sequence, never adjusted by a delta, so any missed or reordered
update is corrected by the next recompute.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models import Review


def average_rating(reviews: Iterable[Review]) -> float | None:
    """Arithmetic mean of ``rating``; None for no reviews (mean of empty set is undefined)."""
    ratings = [r.rating for r in reviews]
    if not ratings:
        return None
    return sum(ratings) / len(ratings)
