"""Runtime configuration for the Slack MCP server.

Values come from environment variables, falling back to a ``.env`` file in the
working directory.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

BOT_TOKEN_PREFIX = "xoxb-"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    slack_bot_token: str = ""
    slack_api_base_url: str = "https://slack.com/api"
    slack_timeout_seconds: float = 30.0
    log_level: str = "INFO"

    def check_token(self) -> str:
        """Return the bot token, or raise ConfigurationError if unusable."""
        token = self.slack_bot_token.strip()
        if not token:
            raise ConfigurationError("SLACK_BOT_TOKEN is required. Please check your .env file.")
        if not token.startswith(BOT_TOKEN_PREFIX):
            raise ConfigurationError(f"SLACK_BOT_TOKEN must be a bot token (starts with {BOT_TOKEN_PREFIX})")
        return token


@lru_cache
def get_settings() -> Settings:
    return Settings()
