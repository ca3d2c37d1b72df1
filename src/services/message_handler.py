"""Message handler service.

Interprets messages that mention the bot and runs the matching command.
"""

from src.config.logging_config import get_logger
from src.domain.models import InboundMessage, utc_now
from src.domain.protocols import Clock, MessageSenderProtocol, RatingStoreProtocol
from src.domain.rating_constants import (
    RATE_ME_COMMAND,
    RESET_COMMAND,
    RESET_CONFIRMATION,
)
from src.services.reply_renderer import render_rating_reply, user_mention
from src.use_cases.rate_user import rate_user_use_case

logger = get_logger(__name__)


class MessageHandler:
    """Dispatches bot mentions to the rating and reset commands.

    Matching is a case-sensitive substring search on the raw text, so
    "rate meters" also triggers a rating.
    """

    def __init__(
        self,
        *,
        store: RatingStoreProtocol,
        connection: MessageSenderProtocol,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._connection = connection
        self._clock = clock or utc_now

    def handle_message(self, message: InboundMessage) -> None:
        """Handle one inbound message; messages without a bot mention are ignored."""

        bot_user_id = self._connection.active_user_id
        if not bot_user_id or user_mention(bot_user_id) not in message.text:
            return

        if RATE_ME_COMMAND in message.text:
            self.rate_user(message.channel, message.user)
            return

        if RESET_COMMAND in message.text:
            self.reset_ratings(message.channel, message.user)
            return

        logger.debug(
            "mention_without_command",
            channel_id=message.channel,
            user_id=message.user,
        )

    def rate_user(self, channel_id: str, user_id: str) -> None:
        result = rate_user_use_case(
            store=self._store, user_id=user_id, now=self._clock()
        )
        self._connection.send_message(render_rating_reply(result), channel_id)

    def reset_ratings(self, channel_id: str, user_id: str) -> None:
        self._store.reset()
        logger.info("ratings_reset_requested", channel_id=channel_id, user_id=user_id)
        self._connection.send_message(RESET_CONFIRMATION, channel_id)
