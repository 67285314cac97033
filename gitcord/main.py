"""gitcord entry point - wires everything together and runs the services."""

from __future__ import annotations

import asyncio
import signal
import sys

import click

from gitcord import __version__
from gitcord.bot.client import GitCordBot
from gitcord.config import Settings, load_settings
from gitcord.github.client import GitHubClient
from gitcord.transports.base import Notifier
from gitcord.transports.discord_webhook import DiscordWebhookNotifier
from gitcord.utils.logging import get_logger, setup_logging
from gitcord.webhooks.server import WebhookServer

log = get_logger(__name__)


class GitCord:
    """Owns the long-lived handles and their start/stop order."""

    def __init__(
        self,
        settings: Settings,
        run_server: bool = True,
        run_bot: bool = True,
    ) -> None:
        self.settings = settings

        self.notifier: Notifier | None = None
        if settings.notifications_enabled:
            self.notifier = DiscordWebhookNotifier(settings.discord_webhook_url)

        self.server: WebhookServer | None = None
        if run_server:
            self.server = WebhookServer(settings, self.notifier)

        self.github: GitHubClient | None = None
        self.bot: GitCordBot | None = None
        if run_bot:
            self.github = GitHubClient(settings.github_token, base_url=settings.github_api_url)
            if settings.discord_token:
                self.bot = GitCordBot(settings, self.github)
            else:
                log.warning("discord_bot_disabled", msg="DISCORD_TOKEN is not set.")

        self._bot_task: asyncio.Task[None] | None = None
        self.shutdown = asyncio.Event()

    async def start(self) -> None:
        log.info("gitcord_starting", version=__version__)

        if self.server is not None:
            if self.notifier is not None:
                await self.notifier.start()
            await self.server.start()

        if self.bot is not None:
            self._bot_task = asyncio.create_task(
                self.bot.start(self.settings.discord_token),
                name="discord-client",
            )
            self._bot_task.add_done_callback(self._on_bot_done)
            log.info("discord_bot_starting")

        log.info("gitcord_ready")

    def _on_bot_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            log.info("discord_bot_exited")
            return
        log.error("discord_bot_failed", error=str(exc), exc_info=exc)
        # Nothing left to serve without the webhook receiver
        if self.server is None:
            self.shutdown.set()

    async def stop(self) -> None:
        log.info("gitcord_stopping")
        if self.bot is not None:
            await self.bot.close()
        if self._bot_task is not None:
            # Outcome is logged by _on_bot_done
            await asyncio.wait([self._bot_task])
            self._bot_task = None
        if self.server is not None:
            await self.server.stop()
            if self.notifier is not None:
                await self.notifier.stop()
        if self.github is not None:
            await self.github.close()
        log.info("gitcord_stopped")


async def run(settings: Settings, run_server: bool = True, run_bot: bool = True) -> None:
    app = GitCord(settings, run_server=run_server, run_bot=run_bot)

    loop = asyncio.get_running_loop()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        app.shutdown.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    await app.start()

    try:
        if sys.platform == "win32":
            while not app.shutdown.is_set():
                await asyncio.sleep(1)
        else:
            await app.shutdown.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await app.stop()


def _prepare(config_path: str | None, log_level: str | None) -> Settings:
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    return settings


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.version_option(__version__, prog_name="gitcord")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Relay GitHub data and events to Discord."""
    ctx.obj = _prepare(config_path, log_level)


@cli.command("run")
@click.pass_obj
def run_all(settings: Settings) -> None:
    """Run the webhook receiver and the slash-command bot."""
    asyncio.run(run(settings))


@cli.command("server")
@click.pass_obj
def run_server(settings: Settings) -> None:
    """Run only the GitHub webhook receiver."""
    asyncio.run(run(settings, run_bot=False))


@cli.command("bot")
@click.pass_obj
def run_bot(settings: Settings) -> None:
    """Run only the slash-command bot."""
    if not settings.discord_token:
        raise click.UsageError("DISCORD_TOKEN must be set to run the bot.")
    asyncio.run(run(settings, run_server=False))


if __name__ == "__main__":
    cli()
