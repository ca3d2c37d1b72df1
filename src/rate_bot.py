"""Rating bot composition root.

Wires a transport, the rating store, the connection manager and the
message handler into one bot instance. Instances share no state.
"""

import random

from src.adapters.rating_store import InMemoryRatingStore
from src.adapters.slack_rtm_transport import SlackRtmTransport
from src.config.logging_config import get_logger
from src.config.settings import Settings, get_settings
from src.domain.models import ConnectionStatus, utc_now
from src.domain.protocols import Clock, RatingStoreProtocol, TransportProtocol
from src.services.connection_manager import ConnectionManager
from src.services.message_handler import MessageHandler

logger = get_logger(__name__)


class RateBot:
    """Chat bot that hands out hourly star ratings on request."""

    def __init__(
        self,
        transport: TransportProtocol,
        *,
        store: RatingStoreProtocol | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        clock = clock or utc_now
        self.transport = transport
        self.ratings = (
            store if store is not None else InMemoryRatingStore(clock=clock, rng=rng)
        )
        self.connection = ConnectionManager(transport)
        self.handler = MessageHandler(
            store=self.ratings, connection=self.connection, clock=clock
        )
        self.connection.register_message_listener(self.handler.handle_message)

    @property
    def status(self) -> ConnectionStatus:
        return self.connection.status

    def start(self) -> None:
        """Start connecting.

        Raises:
            InvalidStateTransitionError: If the bot is not disconnected
            TransportError: If the transport cannot be started
        """
        self.connection.start()

    def stop(self) -> None:
        self.transport.disconnect()


def create_rate_bot(settings: Settings | None = None) -> RateBot:
    """Build a Slack-backed bot from settings.

    Raises:
        ConfigurationError: If no Slack token is configured
    """
    settings = settings or get_settings()
    transport = SlackRtmTransport(bot_token=settings.resolve_slack_token())
    logger.info("rate_bot_created", transport="slack_rtm")
    return RateBot(transport)
