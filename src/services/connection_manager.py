"""Connection manager service.

Owns the connection lifecycle to the messaging transport and dispatches
inbound events. Events arrive one at a time and each is handled to
completion before the next.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from src.config.logging_config import get_logger
from src.domain.exceptions import (
    InvalidStateTransitionError,
    RateBotError,
    TransportError,
)
from src.domain.models import ConnectionStatus, InboundMessage, TransportEventType
from src.domain.protocols import MessageListener, TransportProtocol
from src.observability.tracing import correlation_scope

logger = get_logger(__name__)

EventHandler = Callable[[Mapping[str, Any]], None]


class ConnectionManager:
    """Tracks connection status and forwards messages to a listener.

    Status transitions are driven solely by transport events:
    disconnected -> connecting (start) -> authenticated -> connected,
    and back to disconnected when the transport drops. Nothing reconnects
    automatically; ``start`` may be called again once disconnected.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        *,
        message_listener: MessageListener | None = None,
    ) -> None:
        self._transport = transport
        self._message_listener = message_listener
        self._status = ConnectionStatus.DISCONNECTED
        self._handlers: dict[TransportEventType, EventHandler] = {
            TransportEventType.AUTHENTICATED: self._on_authenticated,
            TransportEventType.CONNECTION_OPENED: self._on_connected,
            TransportEventType.DISCONNECTED: self._on_disconnected,
            TransportEventType.MESSAGE: self._on_message,
        }

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def active_user_id(self) -> str | None:
        return self._transport.active_user_id

    def register_message_listener(self, listener: MessageListener) -> None:
        self._message_listener = listener

    def start(self) -> None:
        """Begin connecting to the transport.

        Raises:
            InvalidStateTransitionError: If the connection is not disconnected
            TransportError: If the transport fails to initiate the connection
        """
        if self._status != ConnectionStatus.DISCONNECTED:
            raise InvalidStateTransitionError(self._status)

        # Set before starting: the transport may report authentication synchronously.
        self._set_status(ConnectionStatus.CONNECTING)
        try:
            self._transport.start(self.handle_event)
        except TransportError:
            self._set_status(ConnectionStatus.DISCONNECTED)
            raise
        except Exception as exc:
            self._set_status(ConnectionStatus.DISCONNECTED)
            raise TransportError(f"Failed to start transport: {exc}") from exc

    def send_message(self, text: str, channel_id: str) -> None:
        """Send a text message to a channel without waiting for delivery."""

        logger.debug("message_sending", channel_id=channel_id, length=len(text))
        self._transport.send_message(text, channel_id)

    def handle_event(
        self, event_type: TransportEventType, payload: Mapping[str, Any]
    ) -> None:
        """Dispatch a single inbound transport event."""

        handler = self._handlers.get(event_type)
        if handler is None:
            logger.debug("transport_event_ignored", event_type=str(event_type))
            return
        handler(payload)

    def _on_authenticated(self, payload: Mapping[str, Any]) -> None:
        self._set_status(ConnectionStatus.AUTHENTICATED)

    def _on_connected(self, payload: Mapping[str, Any]) -> None:
        self._set_status(ConnectionStatus.CONNECTED)

    def _on_disconnected(self, payload: Mapping[str, Any]) -> None:
        self._set_status(ConnectionStatus.DISCONNECTED)

    def _on_message(self, payload: Mapping[str, Any]) -> None:
        sender = payload.get("user")
        if sender is not None and sender == self.active_user_id:
            logger.debug("message_ignored_self", channel_id=payload.get("channel"))
            return

        try:
            message = InboundMessage.model_validate(dict(payload))
        except ValidationError:
            logger.debug(
                "message_ignored_unsupported",
                channel_id=payload.get("channel"),
                subtype=payload.get("subtype"),
            )
            return

        if self._message_listener is None:
            return

        with correlation_scope(
            message.ts, channel_id=message.channel, user_id=message.user
        ):
            try:
                self._message_listener(message)
            except RateBotError:
                logger.exception("message_handling_failed")

    def _set_status(self, status: ConnectionStatus) -> None:
        previous = self._status
        self._status = status
        logger.info(
            "connection_status_changed",
            previous=previous.value,
            current=status.value,
        )
