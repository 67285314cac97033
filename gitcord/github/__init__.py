"""GitHub API access."""

from gitcord.github.client import GitHubClient, parse_repo

__all__ = ["GitHubClient", "parse_repo"]
