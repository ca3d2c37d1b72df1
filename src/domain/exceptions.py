"""Custom exception hierarchy for the rating bot.

Following error taxonomy: retryable, non-retryable, state, transport.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.models import ConnectionStatus


class RateBotError(Exception):
    """Base exception for all application errors."""

    pass


class RetryableError(RateBotError):
    """Errors that can be retried (network issues, temporary failures)."""

    pass


class NonRetryableError(RateBotError):
    """Errors that should not be retried (configuration, state, logic errors)."""

    pass


class ConfigurationError(NonRetryableError):
    """Required configuration (e.g. the Slack token) is missing or invalid."""

    pass


class InvalidStateTransitionError(NonRetryableError):
    """Connection start requested while not disconnected."""

    def __init__(self, status: ConnectionStatus) -> None:
        """Initialize with the status the connection was in."""
        self.status = status
        super().__init__(
            f"Bot cannot start, status unexpected ({getattr(status, 'value', status)})."
        )


class TransportError(RetryableError):
    """Failures surfaced by the messaging transport (auth, network loss)."""

    pass


class SlackAPIError(TransportError):
    """Slack API communication errors."""

    pass


class RateLimitError(TransportError):
    """API rate limit exceeded."""

    def __init__(self, retry_after: int | None = None) -> None:
        """Initialize with optional retry_after seconds."""
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded. Retry after: {retry_after}s")
