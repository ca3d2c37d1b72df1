from __future__ import annotations

"""Entry point for the rating bot.

Connects to Slack with the configured token and serves "rate me" and
"reset" mentions until SIGINT/SIGTERM or until the connection drops.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from scripts import bot_runtime
from src.config.logging_config import get_logger
from src.config.settings import get_settings
from src.domain.exceptions import (
    ConfigurationError,
    InvalidStateTransitionError,
    TransportError,
)
from src.domain.models import ConnectionStatus
from src.rate_bot import create_rate_bot

logger = get_logger(__name__)


def main() -> int:
    load_dotenv()

    settings = get_settings()
    bot_runtime.initialize_logging(settings)

    controller = bot_runtime.create_shutdown_controller()
    bot_runtime.install_signal_handlers(controller)

    try:
        bot = create_rate_bot(settings)
    except ConfigurationError as exc:
        logger.error("bot_configuration_invalid", error=str(exc))
        return 1

    try:
        bot.start()
    except InvalidStateTransitionError as exc:
        logger.error("bot_start_rejected", status=exc.status.value, error=str(exc))
        return 1
    except TransportError:
        logger.exception("bot_start_failed")
        return 1

    stopped = bot_runtime.wait_until_stopped(
        controller,
        is_disconnected=lambda: bot.status == ConnectionStatus.DISCONNECTED,
    )

    if stopped:
        bot.stop()
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())
