"""Outbound notification transports."""

from gitcord.transports.base import Notifier
from gitcord.transports.discord_webhook import DiscordWebhookNotifier, build_embed

__all__ = [
    "Notifier",
    "DiscordWebhookNotifier",
    "build_embed",
]
