"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

SLACK_API_URL = "https://slack.com/api/"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Built once at startup and passed explicitly into every component.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Slack
    slack_verification_token: str = ""
    slack_bot_token: str = ""
    slack_user_token: str = ""
    slack_api_url: str = SLACK_API_URL
    slack_timeout: int = 30

    # Which token creates the channel and sends invites
    provisioning_scope: Literal["bot", "user"] = "bot"

    # Roster
    roster_strategy: Literal["static", "group", "both"] = "group"
    incident_roster: str = ""  # Comma separated user ids
    incident_group_id: str = ""
    incident_group_name: str = ""
    invite_mode: Literal["batch", "individual"] = "batch"

    # Channel
    incident_doc_url: str = ""
    channel_private: bool = False
    statuspage_reminder: bool = True

    # App
    log_level: str = "INFO"

    @property
    def roster_user_ids(self) -> list[str]:
        """Static roster parsed from the comma separated INCIDENT_ROSTER value."""
        return [uid.strip() for uid in self.incident_roster.split(",") if uid.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
