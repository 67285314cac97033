"""/markdown - GitHub Flavored Markdown preview."""

from __future__ import annotations

import io

import discord
from discord import app_commands

from gitcord.bot.embeds import build_markdown_embed, html_preview_document, needs_html_preview
from gitcord.bot.helpers import github_for
from gitcord.errors import GitHubError
from gitcord.utils.logging import get_logger

log = get_logger(__name__)

PREVIEW_FILENAME = "markdown-preview.html"


@app_commands.command(name="markdown", description="Render GitHub Flavored Markdown as a preview")
@app_commands.describe(text="Markdown text to render")
async def markdown_command(interaction: discord.Interaction, text: str) -> None:
    await interaction.response.defer()

    try:
        rendered = await github_for(interaction).render_markdown(text, mode="gfm")
    except GitHubError as exc:
        log.warning("markdown_render_failed", error=str(exc))
        await interaction.followup.send(
            "Error rendering markdown. Please check your syntax and try again."
        )
        return

    # Embeds can't show tables, images or code blocks; attach a page instead
    if needs_html_preview(rendered):
        document = io.BytesIO(html_preview_document(rendered).encode("utf-8"))
        await interaction.followup.send(
            embed=build_markdown_embed(text),
            file=discord.File(document, filename=PREVIEW_FILENAME),
        )
    else:
        await interaction.followup.send(embed=build_markdown_embed(text, rendered))
