"""Domain models for the rating bot.

All models use Pydantic v2 for validation and serialization.
"""

from datetime import datetime, timedelta
from enum import Enum

import pytz
from pydantic import BaseModel, ConfigDict, Field

from src.domain.rating_constants import MAX_RATING_VALUE


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(tz=pytz.UTC)


class ConnectionStatus(str, Enum):
    """Lifecycle status of the messaging connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    CONNECTED = "connected"


class TransportEventType(str, Enum):
    """Kinds of inbound events emitted by a messaging transport."""

    AUTHENTICATED = "authenticated"
    CONNECTION_OPENED = "connection_opened"
    DISCONNECTED = "disconnected"
    MESSAGE = "message"


class Rating(BaseModel):
    """A user's current rating."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(
        ..., ge=0, le=MAX_RATING_VALUE, description="Rating value (0-4)"
    )
    created_at: datetime = Field(..., description="When the rating was issued (UTC)")


class InboundMessage(BaseModel):
    """Plain text message received from the transport."""

    type: str = Field(default="message", description="Event type")
    channel: str = Field(..., description="Channel ID")
    user: str = Field(..., description="Sender user ID")
    text: str = Field(..., description="Raw message text")
    ts: str | None = Field(default=None, description="Message timestamp")
    team: str | None = Field(default=None, description="Team/workspace ID")


class RatingResult(BaseModel):
    """Outcome of a rating request."""

    user_id: str = Field(..., description="User who asked for a rating")
    rating: Rating = Field(..., description="Rating reported to the user")
    is_fresh: bool = Field(..., description="True if the rating was just issued")
    remaining: timedelta | None = Field(
        default=None, description="Cooldown left before a new rating (cached only)"
    )
