"""/pr list and /pr check."""

from __future__ import annotations

import discord
from discord import app_commands

from gitcord.bot.embeds import build_pull_embed, build_pull_list_embed
from gitcord.bot.helpers import REPO_FORMAT_HINT, github_for
from gitcord.errors import GitHubError
from gitcord.github.client import parse_repo
from gitcord.utils.logging import get_logger

log = get_logger(__name__)

pr_group = app_commands.Group(name="pr", description="Manage GitHub pull requests")


@pr_group.command(name="list", description="List open pull requests")
@app_commands.describe(repo="Repository name (owner/repo)")
async def pr_list(interaction: discord.Interaction, repo: str) -> None:
    try:
        owner, name = parse_repo(repo)
    except ValueError:
        await interaction.response.send_message(REPO_FORMAT_HINT, ephemeral=True)
        return

    try:
        pulls = await github_for(interaction).list_pulls(owner, name, state="open")
    except GitHubError as exc:
        log.warning("pr_list_failed", repo=repo, error=str(exc))
        await interaction.response.send_message("Error fetching pull requests.")
        return

    if not pulls:
        await interaction.response.send_message("No open pull requests found.")
        return

    await interaction.response.send_message(embed=build_pull_list_embed(repo, pulls))


@pr_group.command(name="check", description="Check pull request details")
@app_commands.describe(repo="Repository name (owner/repo)", number="Pull request number")
async def pr_check(interaction: discord.Interaction, repo: str, number: int) -> None:
    try:
        owner, name = parse_repo(repo)
    except ValueError:
        await interaction.response.send_message(REPO_FORMAT_HINT, ephemeral=True)
        return

    try:
        pr = await github_for(interaction).get_pull(owner, name, number)
    except GitHubError as exc:
        log.warning("pr_check_failed", repo=repo, number=number, error=str(exc))
        await interaction.response.send_message("Error fetching pull request details.")
        return

    await interaction.response.send_message(embed=build_pull_embed(pr))
