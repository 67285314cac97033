"""Discord slash-command bot."""

from gitcord.bot.client import GitCordBot

__all__ = ["GitCordBot"]
