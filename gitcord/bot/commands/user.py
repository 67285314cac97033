"""/user - GitHub profile lookup."""

from __future__ import annotations

import discord
from discord import app_commands

from gitcord.bot.embeds import (
    build_contributions_embed,
    build_user_embed,
    build_user_repos_embed,
)
from gitcord.bot.helpers import github_for
from gitcord.errors import GitHubError
from gitcord.utils.logging import get_logger

log = get_logger(__name__)


@app_commands.command(name="user", description="View information about a GitHub user")
@app_commands.describe(username="GitHub username to lookup")
async def user_command(interaction: discord.Interaction, username: str) -> None:
    github = github_for(interaction)
    try:
        user = await github.get_user(username)
        repos = await github.list_user_repos(username, sort="updated", per_page=5)
    except GitHubError as exc:
        log.warning("user_command_failed", username=username, error=str(exc))
        await interaction.response.send_message(
            f"Error fetching GitHub user: {username}. "
            "The user might not exist or there may be an API issue.",
            ephemeral=True,
        )
        return

    login = user.get("login", username)
    await interaction.response.send_message(embed=build_user_embed(user))

    repos_embed = build_user_repos_embed(login, repos or [])
    if repos_embed is not None:
        await interaction.followup.send(embed=repos_embed)

    # Contribution totals are GraphQL-only and need a token; skip on failure
    try:
        contributions = await github.get_contributions(username)
    except GitHubError as exc:
        log.warning("user_contributions_failed", username=username, error=str(exc))
        return
    if contributions:
        await interaction.followup.send(embed=build_contributions_embed(login, contributions))
