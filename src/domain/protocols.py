"""Protocol definitions for dependency inversion.

These abstract interfaces define contracts that adapters must implement.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Protocol

from src.domain.models import InboundMessage, Rating, TransportEventType

EventSink = Callable[[TransportEventType, Mapping[str, Any]], None]
"""Callback receiving every inbound transport event, one at a time."""

MessageListener = Callable[[InboundMessage], None]

Clock = Callable[[], datetime]


class RatingStoreProtocol(Protocol):
    """Protocol for the per-user rating storage."""

    def get_rating(self, user_id: str) -> Rating | None:
        """Get the current rating for a user.

        Args:
            user_id: User ID

        Returns:
            The stored rating or None if the user was never rated
        """
        ...

    def create_rating(self, user_id: str) -> Rating:
        """Issue a new random rating, replacing any previous one.

        Args:
            user_id: User ID

        Returns:
            The newly stored rating
        """
        ...

    def reset(self) -> None:
        """Remove all stored ratings."""
        ...


class TransportProtocol(Protocol):
    """Protocol for a real-time messaging transport (Slack RTM, fakes in tests)."""

    @property
    def active_user_id(self) -> str | None:
        """Identity of the bot within the transport (None until authenticated)."""
        ...

    def start(self, event_sink: EventSink) -> None:
        """Begin connecting; events are delivered to ``event_sink``.

        Raises:
            TransportError: If the connection cannot be initiated
        """
        ...

    def send_message(self, text: str, channel_id: str) -> None:
        """Deliver a text message to a channel (fire-and-forget).

        Raises:
            TransportError: On API communication errors
        """
        ...

    def disconnect(self) -> None:
        """Close the connection if open."""
        ...


class MessageSenderProtocol(Protocol):
    """Anything able to post a reply and report the bot's identity."""

    @property
    def active_user_id(self) -> str | None: ...

    def send_message(self, text: str, channel_id: str) -> None: ...
