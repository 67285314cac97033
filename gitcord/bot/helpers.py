"""Shared helpers for slash command handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import discord

if TYPE_CHECKING:
    from gitcord.github.client import GitHubClient

REPO_FORMAT_HINT = "Repository must be in `owner/repo` format."


def github_for(interaction: discord.Interaction) -> GitHubClient:
    """The GitHub client owned by the bot that received *interaction*."""
    return interaction.client.github  # type: ignore[attr-defined]


async def send_reply(interaction: discord.Interaction, content: str | None = None, **kwargs: Any) -> None:
    """Reply to *interaction*, using a follow-up once the response is spent."""
    if interaction.response.is_done():
        await interaction.followup.send(content, **kwargs)
    else:
        await interaction.response.send_message(content, **kwargs)


def link_button_view(label: str, url: str) -> discord.ui.View:
    view = discord.ui.View()
    view.add_item(discord.ui.Button(label=label, style=discord.ButtonStyle.link, url=url))
    return view
