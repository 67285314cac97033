"""Shared fixtures."""

import hashlib
import hmac
from unittest.mock import AsyncMock, MagicMock

import pytest

from gitcord.github.client import GitHubClient


def sign(body: bytes, secret: str) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


@pytest.fixture
def github():
    return AsyncMock(spec=GitHubClient)


@pytest.fixture
def interaction(github):
    i = MagicMock()
    i.client.github = github
    i.response.send_message = AsyncMock()
    i.response.defer = AsyncMock()
    i.response.is_done = MagicMock(return_value=False)
    i.followup.send = AsyncMock()
    return i


_SETTINGS_ENV = (
    "GITHUB_TOKEN",
    "GITHUB_WEBHOOK_SECRET",
    "GITHUB_API_URL",
    "DISCORD_TOKEN",
    "DISCORD_CLIENT_ID",
    "DISCORD_GUILD_ID",
    "DISCORD_WEBHOOK_URL",
    "BIND",
    "PORT",
    "WEBHOOK_PATH",
    "LOG_LEVEL",
    "LOG_JSON",
    "GITCORD_CONFIG",
    "GITCORD_CONFIG_DIR",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's environment and .env file out of Settings."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITCORD_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
