"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gitcord.utils.platform import get_config_dir


class Settings(BaseSettings):
    """gitcord configuration.

    Every field maps to the upper-cased environment variable of the same
    name (``GITHUB_TOKEN``, ``DISCORD_WEBHOOK_URL``, ``PORT``...). Values
    passed to the constructor, such as those loaded from YAML, sit below
    the environment and ``.env`` file in precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # GitHub
    github_token: str = ""
    github_webhook_secret: str = ""
    github_api_url: str = "https://api.github.com"

    # Discord
    discord_token: str = ""
    discord_client_id: str = ""
    discord_guild_id: str = ""
    discord_webhook_url: str = ""

    # Webhook receiver
    bind: str = "0.0.0.0"
    port: int = 3000
    webhook_path: str = "/webhook/github"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("webhook_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.discord_webhook_url)

    @property
    def guild_id(self) -> int | None:
        return int(self.discord_guild_id) if self.discord_guild_id else None

    @property
    def application_id(self) -> int | None:
        return int(self.discord_client_id) if self.discord_client_id else None


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("GITCORD_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # YAML values as defaults, env vars override
    return Settings(**yaml_data)
