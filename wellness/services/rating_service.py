"""Average rating and review count for a subject.

Reviews arrive already loaded (and already filtered to one subject by
the repository).  An empty set is a valid zero result, not an error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from wellness.core.metrics import PROJECTION_SKIPPED_RECORDS
from wellness.models.review import MAX_RATING, MIN_RATING, Review

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True, slots=True)
class RatingSummary:
    average_rating: float
    review_count: int


EMPTY_RATING = RatingSummary(average_rating=0.0, review_count=0)


def round_half_up(value: Decimal | int | float) -> float:
    """Round to 1 decimal place, halves away from zero.

    Python's round() uses banker's rounding and works on binary floats,
    so round(4.25, 1) == 4.2.  Decimal gives 4.3, which is what the mobile
    client has always displayed.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _valid_rating(rating: object) -> bool:
    # bool is an int subclass; True is not a 1-star review.
    if isinstance(rating, bool) or not isinstance(rating, int):
        return False
    return MIN_RATING <= rating <= MAX_RATING


def aggregate_ratings(reviews: Iterable[Review]) -> RatingSummary:
    total = 0
    count = 0
    for review in reviews:
        if not _valid_rating(review.rating):
            logger.warning(
                "Skipping review id=%s with out-of-range rating=%r",
                review.id,
                review.rating,
            )
            PROJECTION_SKIPPED_RECORDS.labels(record="review").inc()
            continue
        total += review.rating
        count += 1

    if count == 0:
        return EMPTY_RATING

    return RatingSummary(
        average_rating=round_half_up(Decimal(total) / Decimal(count)),
        review_count=count,
    )
