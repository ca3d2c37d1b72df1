"""Application settings with Pydantic Settings validation.

The Slack token is read from the environment (or .env file) with a JSON
token file as fallback. Logging options are the only other settings.
"""

import json
from pathlib import Path
from typing import Any, Final, cast

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.logging_config import get_logger
from src.domain.exceptions import ConfigurationError

SLACK_TOKEN_FILE_DEFAULT: Final[str] = "slack_token.json"
SLACK_TOKEN_FILE_KEY: Final[str] = "token"

logger = cast(Any, get_logger(__name__))


def load_token_file(path: Path) -> str | None:
    """Read the Slack token from a JSON file of the form ``{"token": "..."}``.

    Args:
        path: Token file location

    Returns:
        Token string or None if the file does not exist

    Raises:
        ConfigurationError: If the file is unreadable or malformed
    """
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigurationError(f"Cannot read Slack token file {path}: {e}") from e

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Slack token file {path} must contain a JSON object")

    token = payload.get(SLACK_TOKEN_FILE_KEY)
    if token is not None and not isinstance(token, str):
        raise ConfigurationError(f"Slack token in {path} must be a string")

    logger.debug("slack_token_file_loaded", path=str(path))
    return token


class Settings(BaseSettings):
    """Application settings.

    Secrets are loaded from the environment or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === SECRETS ===

    slack_api_token: SecretStr | None = Field(
        default=None, description="Slack bot token (SLACK_API_TOKEN)"
    )

    # === NON-SENSITIVE CONFIG ===

    slack_token_file: Path = Field(
        default=Path(SLACK_TOKEN_FILE_DEFAULT),
        description="JSON file holding the token when SLACK_API_TOKEN is unset",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit logs as JSON lines")

    @field_validator("slack_api_token", mode="before")
    @classmethod
    def _blank_token_is_unset(cls, value: SecretStr | str | None) -> SecretStr | None:
        if value is None:
            return None

        if isinstance(value, SecretStr):
            secret_value = value.get_secret_value()
        else:
            secret_value = str(value)

        if not secret_value.strip():
            return None

        return value if isinstance(value, SecretStr) else SecretStr(secret_value)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    def resolve_slack_token(self) -> str:
        """Return the Slack token, preferring the environment over the token file.

        Raises:
            ConfigurationError: If no non-empty token is configured
        """
        if self.slack_api_token is not None:
            return self.slack_api_token.get_secret_value().strip()

        token = load_token_file(self.slack_token_file)
        if token is None or not token.strip():
            raise ConfigurationError(
                "Slack token missing: set SLACK_API_TOKEN or provide "
                f"'{SLACK_TOKEN_FILE_KEY}' in {self.slack_token_file}"
            )

        return token.strip()


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
