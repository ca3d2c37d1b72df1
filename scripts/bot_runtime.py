from __future__ import annotations

"""Common runtime helpers for the bot entry point."""

import signal
import threading
from collections.abc import Callable
from dataclasses import dataclass
from types import FrameType
from typing import Protocol

from src.config.logging_config import get_logger, setup_logging
from src.config.settings import Settings

logger = get_logger(__name__)


class ShutdownSignal(Protocol):
    def is_set(self) -> bool: ...

    def wait(self, timeout: float) -> bool: ...


@dataclass
class _ShutdownController:
    """Mutable shutdown state shared between signal handlers and the wait loop."""

    _event: threading.Event

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        return self._event.wait(timeout)

    def request(self, signum: int, frame: FrameType | None) -> None:
        sig_name = signal.Signals(signum).name
        logger.info("shutdown_signal_received", signal=sig_name)
        self._event.set()


def create_shutdown_controller() -> _ShutdownController:
    return _ShutdownController(threading.Event())


def install_signal_handlers(controller: _ShutdownController) -> None:
    """Register SIGTERM/SIGINT handlers for graceful shutdown."""

    def _handler(signum: int, frame: FrameType | None) -> None:
        controller.request(signum, frame)

    signal.signal(signal.SIGTERM, _handler)
    signal.signal(signal.SIGINT, _handler)


def initialize_logging(settings: Settings) -> None:
    """Initialize structlog-based logging for the bot process."""

    setup_logging(log_level=settings.log_level, json_logs=settings.json_logs)
    logger.info(
        "logging_initialized", level=settings.log_level, json_logs=settings.json_logs
    )


def wait_until_stopped(
    controller: ShutdownSignal,
    *,
    is_disconnected: Callable[[], bool],
    poll_interval: float = 1.0,
) -> bool:
    """Block until shutdown is requested or the connection is lost.

    Returns:
        True if shutdown was requested, False if the connection dropped
    """

    poll_interval = max(0.1, poll_interval)
    logger.info("bot_wait_loop_started", poll_interval=poll_interval)

    while not controller.is_set():
        if is_disconnected():
            logger.warning("bot_connection_lost")
            return False
        controller.wait(poll_interval)

    logger.info("bot_wait_loop_stopped")
    return True


__all__ = [
    "ShutdownSignal",
    "create_shutdown_controller",
    "initialize_logging",
    "install_signal_handlers",
    "wait_until_stopped",
]
