"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import random
from collections.abc import Iterator, Mapping
from datetime import datetime, timedelta
from typing import Any

import pytest
import pytz

from src.adapters.rating_store import InMemoryRatingStore
from src.config.logging_config import clear_context
from src.domain.models import TransportEventType
from src.domain.protocols import EventSink
from src.rate_bot import RateBot

BOT_USER_ID = "UBOT"


class FixedRandom(random.Random):
    """Random source whose draws always return the same value."""

    def __init__(self, value: int) -> None:
        super().__init__(0)
        self.value = value

    def randrange(self, *args: Any, **kwargs: Any) -> int:  # type: ignore[override]
        return self.value


class FrozenClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeTransport:
    """In-memory transport recording outbound messages."""

    def __init__(self, user_id: str = BOT_USER_ID) -> None:
        self._user_id = user_id
        self._active_user_id: str | None = None
        self.event_sink: EventSink | None = None
        self.sent: list[tuple[str, str]] = []
        self.start_calls = 0
        self.disconnect_calls = 0

    @property
    def active_user_id(self) -> str | None:
        return self._active_user_id

    def start(self, event_sink: EventSink) -> None:
        self.start_calls += 1
        self.event_sink = event_sink
        self._active_user_id = self._user_id

    def send_message(self, text: str, channel_id: str) -> None:
        self.sent.append((text, channel_id))

    def disconnect(self) -> None:
        self.disconnect_calls += 1

    def emit(
        self, event_type: TransportEventType, payload: Mapping[str, Any] | None = None
    ) -> None:
        assert self.event_sink is not None, "transport not started"
        self.event_sink(event_type, payload or {})

    def connect_fully(self) -> None:
        self.emit(TransportEventType.AUTHENTICATED, {"user_id": self._user_id})
        self.emit(TransportEventType.CONNECTION_OPENED, {"type": "hello"})

    def deliver(self, user: str, text: str, channel: str = "C1") -> None:
        self.emit(
            TransportEventType.MESSAGE,
            {
                "type": "message",
                "channel": channel,
                "user": user,
                "text": text,
                "ts": "1728000000.000100",
                "team": "T1",
            },
        )


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at a fixed UTC instant."""
    return FrozenClock(datetime(2025, 10, 10, 10, 0, tzinfo=pytz.UTC))


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible draws."""
    return random.Random(42)


@pytest.fixture
def store(clock: FrozenClock, rng: random.Random) -> InMemoryRatingStore:
    """Empty rating store on the frozen clock."""
    return InMemoryRatingStore(clock=clock, rng=rng)


@pytest.fixture
def transport() -> FakeTransport:
    """Fake messaging transport."""
    return FakeTransport()


@pytest.fixture
def bot(transport: FakeTransport, clock: FrozenClock, rng: random.Random) -> RateBot:
    """Started and fully connected bot on a fake transport."""
    rate_bot = RateBot(transport, clock=clock, rng=rng)
    rate_bot.start()
    transport.connect_fully()
    return rate_bot


@pytest.fixture(autouse=True)
def reset_log_context() -> Iterator[None]:
    """Drop structlog context bound by a test so it cannot leak into the next."""
    yield
    clear_context()
