"""Rate user use case.

Issues a fresh rating or reports the cached one while the cooldown runs.
"""

from datetime import datetime, timedelta

from src.config.logging_config import get_logger
from src.domain.models import RatingResult
from src.domain.protocols import RatingStoreProtocol
from src.domain.rating_constants import RATING_COOLDOWN

logger = get_logger(__name__)


def rate_user_use_case(
    *,
    store: RatingStoreProtocol,
    user_id: str,
    now: datetime,
    cooldown: timedelta = RATING_COOLDOWN,
) -> RatingResult:
    """Resolve the rating to report for a user.

    1. Look up the user's existing rating
    2. If none exists, create one (fresh)
    3. If the cooldown has elapsed since it was created, replace it (fresh)
    4. Otherwise reuse it and report the remaining cooldown (cached)

    Args:
        store: Rating storage
        user_id: User requesting a rating
        now: Current time, compared against the rating timestamp
        cooldown: Minimum time between fresh ratings

    Returns:
        RatingResult describing the rating and whether it is fresh

    Example:
        >>> result = rate_user_use_case(store=store, user_id="U1", now=now)
        >>> result.is_fresh
        True
    """
    rating = store.get_rating(user_id)

    if rating is not None:
        elapsed = now - rating.created_at
        if elapsed < cooldown:
            remaining = cooldown - elapsed
            logger.info(
                "rating_cached",
                user_id=user_id,
                value=rating.value,
                remaining_seconds=remaining.total_seconds(),
            )
            return RatingResult(
                user_id=user_id, rating=rating, is_fresh=False, remaining=remaining
            )

    rating = store.create_rating(user_id)
    logger.info("rating_created", user_id=user_id, value=rating.value)
    return RatingResult(user_id=user_id, rating=rating, is_fresh=True)
