"""/search code and /search repositories."""

from __future__ import annotations

from typing import Any

import discord
from discord import app_commands

from gitcord.bot.embeds import (
    TOP_SEARCH_RESULTS,
    build_code_search_embed,
    build_repo_search_embed,
    search_url,
)
from gitcord.bot.helpers import github_for, link_button_view
from gitcord.errors import GitHubError
from gitcord.utils.logging import get_logger

log = get_logger(__name__)

RATE_LIMIT_HINT = "GitHub search has rate limits - please try again later or refine your query."

search_group = app_commands.Group(name="search", description="Search across GitHub")


def scoped_query(query: str, scope: str, owner: str) -> str:
    """Add a ``user:``/``org:`` qualifier. Raises ValueError if *owner* is needed but empty."""
    if scope in ("user", "org"):
        if not owner:
            raise ValueError("owner required")
        return f"{query} {scope}:{owner}"
    return query


async def _send_results(
    interaction: discord.Interaction, embed: discord.Embed, total: int, more_url: str
) -> None:
    kwargs: dict[str, Any] = {"embed": embed}
    if total > TOP_SEARCH_RESULTS:
        kwargs["view"] = link_button_view("View on GitHub", more_url)
    await interaction.followup.send(**kwargs)


@search_group.command(name="code", description="Search for code across GitHub repositories")
@app_commands.describe(
    query='Search query (e.g., "function in:file language:javascript")',
    scope="Scope of the search",
    owner='Username or organization (required if scope is not "All GitHub")',
)
@app_commands.choices(
    scope=[
        app_commands.Choice(name="All GitHub", value="all"),
        app_commands.Choice(name="User repositories", value="user"),
        app_commands.Choice(name="Organization repositories", value="org"),
    ]
)
async def search_code(
    interaction: discord.Interaction,
    query: str,
    scope: str = "all",
    owner: str = "",
) -> None:
    await interaction.response.defer()

    try:
        search_query = scoped_query(query, scope, owner)
    except ValueError:
        await interaction.followup.send(
            "You must specify an owner when using user or organization scope."
        )
        return

    try:
        results = await github_for(interaction).search_code(search_query, per_page=10)
    except GitHubError as exc:
        log.warning("search_code_failed", query=search_query, error=str(exc))
        await interaction.followup.send(f"Error searching code. {RATE_LIMIT_HINT}")
        return

    total = results.get("total_count", 0)
    if total == 0:
        await interaction.followup.send(f"No code found matching: {search_query}")
        return

    await _send_results(
        interaction,
        build_code_search_embed(search_query, results),
        total,
        search_url(search_query, "code"),
    )


@search_group.command(name="repositories", description="Search for repositories on GitHub")
@app_commands.describe(query='Search query (e.g., "tensorflow stars:>1000")')
async def search_repositories(interaction: discord.Interaction, query: str) -> None:
    await interaction.response.defer()

    try:
        results = await github_for(interaction).search_repos(query, per_page=10)
    except GitHubError as exc:
        log.warning("search_repositories_failed", query=query, error=str(exc))
        await interaction.followup.send(f"Error searching repositories. {RATE_LIMIT_HINT}")
        return

    total = results.get("total_count", 0)
    if total == 0:
        await interaction.followup.send(f"No repositories found matching: {query}")
        return

    await _send_results(
        interaction,
        build_repo_search_embed(query, results),
        total,
        search_url(query, "repositories"),
    )
