"""Reply renderer service for rating responses.

Turns a RatingResult into the chat text sent back to the user.
"""

from datetime import timedelta
from typing import Final

from src.domain.models import RatingResult
from src.domain.rating_constants import SCORE_MESSAGES, SECONDS_DISPLAY_THRESHOLD

STAR_UNIT: Final[str] = "star"
SECOND_UNIT: Final[str] = "second"
MINUTE_UNIT: Final[str] = "minute"


def plural_string(value: int, unit: str) -> str:
    """Render a quantity with its unit, pluralized unless the quantity is 1.

    Example:
        >>> plural_string(1, "star")
        '1 star'
        >>> plural_string(0, "star")
        '0 stars'
    """
    if value == 1:
        return f"{value} {unit}"
    return f"{value} {unit}s"


def user_mention(user_id: str) -> str:
    return f"<@{user_id}>"


def render_remaining(remaining: timedelta) -> str:
    """Render a remaining cooldown, whole seconds under a minute, else whole minutes."""
    if remaining < SECONDS_DISPLAY_THRESHOLD:
        return plural_string(remaining // timedelta(seconds=1), SECOND_UNIT)
    return plural_string(remaining // timedelta(minutes=1), MINUTE_UNIT)


def render_rating_reply(result: RatingResult) -> str:
    """Render the reply for a rating request.

    Fresh ratings get the flavor text for their score, cached ones get the
    time left until a new rating can be issued.

    Args:
        result: Outcome of the rating workflow

    Returns:
        Reply text

    Example:
        >>> render_rating_reply(cached_result)  # value=2, 55 minutes left
        'Hey <@U1>! I have already rated you with a score of 3 stars!\\nYou can get a new rating in 55 minutes!'
    """
    stars = plural_string(result.rating.value + 1, STAR_UNIT)
    greeting = f"Hey {user_mention(result.user_id)}! "

    if result.is_fresh:
        return (
            f"{greeting}I have given you a rating of {stars}!\n"
            f"{SCORE_MESSAGES[result.rating.value]}"
        )

    remaining = result.remaining if result.remaining is not None else timedelta(0)
    return (
        f"{greeting}I have already rated you with a score of {stars}!\n"
        f"You can get a new rating in {render_remaining(remaining)}!"
    )
