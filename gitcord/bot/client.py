"""Discord slash-command bot using discord.py."""

from __future__ import annotations

import discord
from discord import app_commands

from gitcord.bot.commands import register_commands
from gitcord.bot.helpers import send_reply
from gitcord.config import Settings
from gitcord.github.client import GitHubClient
from gitcord.utils.logging import get_logger

log = get_logger(__name__)

COMMAND_ERROR_MESSAGE = "There was an error while executing this command!"


class GitCordBot(discord.Client):
    """Serves the GitHub slash commands.

    The GitHub client is injected and shared by every command invocation;
    handlers reach it through ``interaction.client.github``.
    """

    def __init__(self, settings: Settings, github: GitHubClient) -> None:
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(intents=intents, application_id=settings.application_id)
        self.settings = settings
        self.github = github
        self.tree = app_commands.CommandTree(self)
        self.tree.error(self._on_command_error)
        register_commands(self.tree)

    async def setup_hook(self) -> None:
        """Sync slash commands to the configured guild, or globally."""
        guild_id = self.settings.guild_id
        try:
            if guild_id is not None:
                guild = discord.Object(id=guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
            else:
                synced = await self.tree.sync()
        except discord.HTTPException:
            log.exception("discord_commands_sync_failed", guild_id=guild_id)
            return
        log.info("discord_commands_synced", guild_id=guild_id, count=len(synced))

    async def on_ready(self) -> None:
        log.info("discord_connected", user=str(self.user))

    async def _on_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        command = interaction.command.qualified_name if interaction.command else None
        log.error(
            "discord_command_error",
            command=command,
            error=str(error),
            exc_info=error,
        )
        await send_reply(interaction, COMMAND_ERROR_MESSAGE, ephemeral=True)
