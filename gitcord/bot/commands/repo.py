"""/repo - repository statistics."""

from __future__ import annotations

import discord
from discord import app_commands

from gitcord.bot.embeds import build_contributors_embed, build_repo_embed
from gitcord.bot.helpers import REPO_FORMAT_HINT, github_for
from gitcord.errors import GitHubError
from gitcord.github.client import parse_repo
from gitcord.utils.logging import get_logger

log = get_logger(__name__)


@app_commands.command(name="repo", description="View repository statistics")
@app_commands.describe(repository="Repository name (owner/repo)")
async def repo_command(interaction: discord.Interaction, repository: str) -> None:
    try:
        owner, name = parse_repo(repository)
    except ValueError:
        await interaction.response.send_message(REPO_FORMAT_HINT, ephemeral=True)
        return

    github = github_for(interaction)
    try:
        repo_data = await github.get_repo(owner, name)
        contributors = await github.list_contributors(owner, name)
        languages = await github.list_languages(owner, name)
    except GitHubError as exc:
        log.warning("repo_command_failed", repository=repository, error=str(exc))
        await interaction.response.send_message("Error fetching repository information.")
        return

    await interaction.response.send_message(embed=build_repo_embed(repo_data, languages))

    contributors_embed = build_contributors_embed(repository, contributors)
    if contributors_embed is not None:
        await interaction.followup.send(embed=contributors_embed)
