"""Slack Web API client adapter."""

from typing import Any, Final, cast

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from src.config.logging_config import get_logger
from src.domain.exceptions import RateLimitError, SlackAPIError

logger = get_logger(__name__)

DEFAULT_RETRY_AFTER_SECONDS: Final[int] = 60


class SlackClient:
    """Slack Web API client for bot identity and outbound messages."""

    def __init__(self, bot_token: str, *, client: WebClient | None = None) -> None:
        """Initialize Slack client.

        Args:
            bot_token: Slack bot user OAuth token
            client: Optional preconfigured WebClient (used by tests)
        """
        self.client = client or WebClient(token=bot_token)

    def auth_test(self) -> dict[str, Any]:
        """Resolve the identity of the bot behind the token.

        Returns:
            auth.test payload (``user_id``, ``team_id``, ``bot_id`` ...)

        Raises:
            SlackAPIError: On API communication errors or a rejected token
        """
        try:
            response = self.client.auth_test()
        except SlackApiError as e:
            raise SlackAPIError(f"Failed to authenticate: {e}") from e

        data = self._extract_data(response)
        if not data.get("ok"):
            raise SlackAPIError(f"Failed to authenticate: {data.get('error')}")

        logger.info(
            "slack_authenticated",
            user_id=data.get("user_id"),
            team_id=data.get("team_id"),
        )
        return data

    def post_message(self, channel_id: str, text: str) -> str:
        """Post a plain text message to a channel.

        Args:
            channel_id: Target channel ID
            text: Message text

        Returns:
            Message timestamp

        Raises:
            SlackAPIError: On API communication errors
            RateLimitError: On rate limit exceeded
        """
        try:
            response = self.client.chat_postMessage(channel=channel_id, text=text)
        except SlackApiError as e:
            if e.response.get("error") == "ratelimited":
                retry_after = int(
                    e.response.headers.get("Retry-After", DEFAULT_RETRY_AFTER_SECONDS)
                )
                raise RateLimitError(retry_after=retry_after) from e

            raise SlackAPIError(f"Failed to post message: {e}") from e

        data = self._extract_data(response)
        if not data.get("ok"):
            raise SlackAPIError(f"Failed to post message: {data.get('error')}")

        return cast(str, data.get("ts", ""))

    def _extract_data(self, response: Any) -> dict[str, Any]:
        if hasattr(response, "data"):
            return cast(dict[str, Any], response.data)
        return cast(dict[str, Any], response)
