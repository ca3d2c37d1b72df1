from __future__ import annotations

import structlog
from structlog.testing import capture_logs

from src.config.logging_config import (
    add_app_context,
    bind_context,
    clear_context,
    unbind_context,
)
from src.domain.models import InboundMessage
from src.observability.tracing import CORRELATION_ID_KEY, correlation_scope
from src.services.connection_manager import ConnectionManager
from tests.conftest import FakeTransport


def test_correlation_scope_binds_and_unbinds_context() -> None:
    with correlation_scope("1728000000.000100", channel_id="C1", user_id=None) as cid:
        bound = structlog.contextvars.get_contextvars()
        assert cid == "1728000000.000100"
        assert bound[CORRELATION_ID_KEY] == cid
        assert bound["channel_id"] == "C1"
        assert "user_id" not in bound

    remaining = structlog.contextvars.get_contextvars()
    assert CORRELATION_ID_KEY not in remaining
    assert "channel_id" not in remaining


def test_correlation_scope_generates_id() -> None:
    with correlation_scope() as cid:
        assert cid


def test_message_handled_inside_correlation_scope(transport: FakeTransport) -> None:
    seen: list[dict[str, object]] = []

    def listener(message: InboundMessage) -> None:
        seen.append(dict(structlog.contextvars.get_contextvars()))

    manager = ConnectionManager(transport, message_listener=listener)
    manager.start()
    transport.deliver(user="U1", text="hi", channel="C5")

    assert seen[0]["channel_id"] == "C5"
    assert seen[0]["user_id"] == "U1"
    assert seen[0][CORRELATION_ID_KEY] == "1728000000.000100"


def test_status_changes_are_logged(transport: FakeTransport) -> None:
    manager = ConnectionManager(transport)

    with capture_logs() as logs:
        manager.start()

    status_logs = [log for log in logs if log["event"] == "connection_status_changed"]
    assert status_logs == [
        {
            "event": "connection_status_changed",
            "log_level": "info",
            "previous": "disconnected",
            "current": "connecting",
        }
    ]


def test_add_app_context_sets_app_name() -> None:
    event_dict = add_app_context(None, "info", {"event": "x"})  # type: ignore[arg-type]

    assert event_dict["app"] == "rate_bot"


def test_context_helpers_bind_unbind_and_clear() -> None:
    bind_context(channel_id="C1", user_id="U1")
    unbind_context("user_id")
    assert structlog.contextvars.get_contextvars() == {"channel_id": "C1"}

    clear_context()

    assert structlog.contextvars.get_contextvars() == {}
