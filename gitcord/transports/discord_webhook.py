"""Discord webhook notifier using discord.py."""

from __future__ import annotations

import asyncio

import aiohttp
import discord

from gitcord.errors import DownstreamError
from gitcord.models import NotificationMessage
from gitcord.transports.base import Notifier
from gitcord.utils.logging import get_logger

log = get_logger(__name__)


def build_embed(message: NotificationMessage) -> discord.Embed:
    embed = discord.Embed(
        title=message.title,
        description=message.description,
        color=message.color,
    )
    for f in message.fields:
        embed.add_field(name=f.name, value=f.value, inline=f.inline)
    return embed


class DiscordWebhookNotifier(Notifier):
    """Posts notifications as embeds to one Discord webhook URL."""

    def __init__(
        self,
        webhook_url: str,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._url = webhook_url
        self._session = session
        self._owns_session = session is None
        self._webhook: discord.Webhook | None = None

    @property
    def platform_name(self) -> str:
        return "discord"

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        self._webhook = discord.Webhook.from_url(self._url, session=self._session)
        log.info("discord_notifier_started", webhook_id=self._webhook.id)

    async def stop(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None
        self._webhook = None
        log.info("discord_notifier_stopped")

    async def send_notification(self, message: NotificationMessage) -> None:
        if self._webhook is None:
            raise DownstreamError("Discord notifier is not started")

        try:
            await self._webhook.send(embed=build_embed(message))
        except (discord.HTTPException, aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            log.error("discord_notify_failed", title=message.title, error=str(exc))
            raise DownstreamError(f"Discord webhook send failed: {exc}") from exc

        log.info("discord_notified", title=message.title)
