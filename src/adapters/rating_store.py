"""In-memory rating storage adapter."""

from __future__ import annotations

import random

from src.config.logging_config import get_logger
from src.domain.models import Rating, utc_now
from src.domain.protocols import Clock
from src.domain.rating_constants import RATING_VALUES

__all__ = ["InMemoryRatingStore"]

logger = get_logger(__name__)


class InMemoryRatingStore:
    """Process-local store holding at most one rating per user.

    Ratings live for the lifetime of the owning bot and are never persisted.
    Access is expected from a single event-handling context, so no locking
    is done here.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            clock: Callable returning the current aware datetime (default UTC now)
            rng: Random source used for rating draws
        """
        self._clock = clock or utc_now
        self._random = rng or random.Random()
        self._ratings: dict[str, Rating] = {}

    def get_rating(self, user_id: str) -> Rating | None:
        return self._ratings.get(user_id)

    def create_rating(self, user_id: str) -> Rating:
        """Draw a new rating uniformly from 0-4 and store it for the user."""

        rating = Rating(
            value=self._random.randrange(RATING_VALUES),
            created_at=self._clock(),
        )
        self._ratings[user_id] = rating
        logger.debug(
            "rating_stored",
            user_id=user_id,
            value=rating.value,
            created_at=rating.created_at.isoformat(),
        )
        return rating

    def reset(self) -> None:
        dropped = len(self._ratings)
        self._ratings.clear()
        logger.info("ratings_reset", ratings_dropped=dropped)

    def __len__(self) -> int:
        return len(self._ratings)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._ratings
