"""Rating rules and reply text for the rating bot.

The values here define what a rating is and how often a user may get a new
one. Reply rendering and the rating workflow both read from this module.
"""

from datetime import timedelta
from typing import Final

RATING_VALUES: Final[int] = 5
"""Number of possible rating values (0-4, shown to users as 1-5 stars)."""

MAX_RATING_VALUE: Final[int] = RATING_VALUES - 1

RATING_COOLDOWN: Final[timedelta] = timedelta(hours=1)
"""Minimum time between two fresh ratings for the same user."""

SECONDS_DISPLAY_THRESHOLD: Final[timedelta] = timedelta(minutes=1)
"""Remaining cooldown below this is shown in seconds, otherwise in minutes."""

# Commands (case-sensitive substring match, checked in this order)
RATE_ME_COMMAND: Final[str] = "rate me"
RESET_COMMAND: Final[str] = "reset"

RESET_CONFIRMATION: Final[str] = "I have reset all ratings."

SCORE_MESSAGES: Final[tuple[str, ...]] = (
    "I feel bad, but I'm sure you'll do better next time! Hang in there!",
    "I know it might not sound great, but it's better than 1 star!",
    "Above average! Now that's not too bad, is it?",
    "Ooh, I like you. You're pretty cool you know!",
    "You... are... *AWESOME*! Sometimes I can't believe you even exist!",
)
"""Flavor text indexed by rating value (0 = lowest, 4 = highest)."""
