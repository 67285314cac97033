"""Slash command registry."""

from __future__ import annotations

from discord import app_commands

from gitcord.bot.commands.markdown import markdown_command
from gitcord.bot.commands.pr import pr_group
from gitcord.bot.commands.repo import repo_command
from gitcord.bot.commands.search import search_group
from gitcord.bot.commands.user import user_command

COMMANDS: dict[str, app_commands.Command | app_commands.Group] = {
    command.name: command
    for command in (repo_command, user_command, pr_group, search_group, markdown_command)
}


def register_commands(tree: app_commands.CommandTree) -> None:
    for command in COMMANDS.values():
        tree.add_command(command)
