"""Slack Real Time Messaging transport adapter.

Bridges slack_sdk's RTM client callbacks onto the typed transport events
consumed by the connection manager.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from slack_sdk.rtm_v2 import RTMClient

from src.adapters.slack_client import SlackClient
from src.config.logging_config import get_logger
from src.domain.exceptions import TransportError
from src.domain.models import TransportEventType
from src.domain.protocols import EventSink

__all__ = ["SlackRtmTransport"]

logger = get_logger(__name__)

# One listener worker: inbound events are handled strictly one at a time.
RTM_LISTENER_CONCURRENCY: Final[int] = 1

RTM_HELLO_EVENT: Final[str] = "hello"
RTM_MESSAGE_EVENT: Final[str] = "message"


class SlackRtmTransport:
    """Messaging transport backed by the Slack RTM API."""

    def __init__(
        self,
        bot_token: str,
        *,
        slack_client: SlackClient | None = None,
        rtm_client: Any | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            bot_token: Slack bot user OAuth token
            slack_client: Optional Web API client (shared with the RTM client)
            rtm_client: Optional preconfigured RTM client (used by tests)
        """
        self._slack_client = slack_client or SlackClient(bot_token)
        self._rtm = rtm_client or RTMClient(
            token=bot_token,
            web_client=self._slack_client.client,
            auto_reconnect_enabled=False,
            concurrency=RTM_LISTENER_CONCURRENCY,
        )
        self._event_sink: EventSink | None = None
        self._active_user_id: str | None = None

        self._rtm.on(RTM_HELLO_EVENT)(
            lambda client, event: self._emit(
                TransportEventType.CONNECTION_OPENED, event
            )
        )
        self._rtm.on(RTM_MESSAGE_EVENT)(
            lambda client, event: self._emit(TransportEventType.MESSAGE, event)
        )
        self._rtm.on_close_listeners.append(self._handle_close)

    @property
    def active_user_id(self) -> str | None:
        return self._active_user_id

    def start(self, event_sink: EventSink) -> None:
        """Authenticate, then open the RTM socket.

        Raises:
            TransportError: If authentication or the socket connection fails
        """
        self._event_sink = event_sink

        identity = self._slack_client.auth_test()
        self._active_user_id = identity.get("user_id")
        self._emit(
            TransportEventType.AUTHENTICATED,
            {"user_id": self._active_user_id, "team_id": identity.get("team_id")},
        )

        # RTM socket URLs are single-use; connect() fetches a new one when unset.
        self._rtm.wss_uri = None
        try:
            self._rtm.connect()
        except Exception as exc:
            raise TransportError(f"Failed to open RTM connection: {exc}") from exc

        logger.info("slack_rtm_connecting", user_id=self._active_user_id)

    def send_message(self, text: str, channel_id: str) -> None:
        self._slack_client.post_message(channel_id, text)

    def disconnect(self) -> None:
        if not self._rtm.is_connected():
            logger.debug("slack_rtm_disconnect_skipped")
            return
        logger.info("slack_rtm_disconnect_requested")
        self._rtm.disconnect()

    def _handle_close(self, code: int | None = None, reason: str | None = None) -> None:
        logger.warning("slack_rtm_closed", code=code, reason=reason)
        self._emit(TransportEventType.DISCONNECTED, {"code": code, "reason": reason})

    def _emit(self, event_type: TransportEventType, payload: Mapping[str, Any]) -> None:
        if self._event_sink is None:
            logger.debug("slack_rtm_event_before_start", event_type=event_type.value)
            return
        self._event_sink(event_type, payload)
