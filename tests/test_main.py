"""Tests for application wiring and the CLI."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import discord
from click.testing import CliRunner

from gitcord import __version__, main
from gitcord.config import Settings
from gitcord.main import GitCord, cli
from gitcord.transports.discord_webhook import DiscordWebhookNotifier


class TestGitCord:
    async def test_server_only_without_webhook_url(self):
        app = GitCord(Settings(), run_bot=False)
        assert app.server is not None
        assert app.notifier is None
        assert app.github is None
        assert app.bot is None

    async def test_notifier_when_webhook_url_set(self):
        app = GitCord(
            Settings(discord_webhook_url="https://discord.com/api/webhooks/1/abc"),
            run_bot=False,
        )
        assert isinstance(app.notifier, DiscordWebhookNotifier)

    async def test_bot_needs_token(self):
        app = GitCord(Settings(), run_server=False)
        assert app.server is None
        assert app.github is not None
        assert app.bot is None
        await app.github.close()

    async def test_bot_with_token(self):
        app = GitCord(Settings(discord_token="token"), run_server=False)
        assert app.bot is not None
        assert app.bot.github is app.github
        await app.github.close()

    async def test_start_stop_order(self):
        app = GitCord(
            Settings(discord_webhook_url="https://discord.com/api/webhooks/1/abc"),
            run_bot=False,
        )
        app.notifier = AsyncMock()
        app.server = AsyncMock()

        await app.start()
        app.notifier.start.assert_awaited_once()
        app.server.start.assert_awaited_once()

        await app.stop()
        app.server.stop.assert_awaited_once()
        app.notifier.stop.assert_awaited_once()

    async def test_bot_login_failure_is_logged_and_stops(self, monkeypatch):
        log = MagicMock()
        monkeypatch.setattr(main, "log", log)
        app = GitCord(Settings(discord_token="bad-token"), run_server=False)
        app.bot.start = AsyncMock(side_effect=discord.LoginFailure("Improper token has been passed."))
        app.bot.close = AsyncMock()

        await app.start()
        await asyncio.wait_for(app.shutdown.wait(), timeout=1)
        await app.stop()

        events = [c.args[0] for c in log.error.call_args_list]
        assert events == ["discord_bot_failed"]
        assert isinstance(log.error.call_args.kwargs["exc_info"], discord.LoginFailure)

    async def test_bot_failure_keeps_webhook_receiver_running(self, monkeypatch):
        log = MagicMock()
        monkeypatch.setattr(main, "log", log)
        app = GitCord(Settings(discord_token="bad-token"))
        app.server = AsyncMock()
        app.bot.start = AsyncMock(side_effect=discord.LoginFailure("Improper token has been passed."))
        app.bot.close = AsyncMock()

        await app.start()
        await app.stop()

        log.error.assert_called_once()
        assert not app.shutdown.is_set()


class TestCli:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bot_requires_token(self):
        result = CliRunner().invoke(cli, ["bot"])
        assert result.exit_code != 0
        assert "DISCORD_TOKEN" in result.output
