"""Discord embed builders for slash command replies.

Each builder takes decoded GitHub API data and returns a styled
``discord.Embed`` ready to send. Builders never call the API themselves.
"""

from __future__ import annotations

import html
import re
from datetime import datetime
from typing import Any
from urllib.parse import quote

import discord

from gitcord.models import GREEN, PURPLE

GITHUB_BLUE = 0x0366D6

# Discord limits
MAX_FIELDS = 25
MAX_FIELD_VALUE = 1024
MAX_EMBED_TOTAL = 6000

# Top-N cut-offs for list embeds
TOP_LANGUAGES = 5
TOP_CONTRIBUTORS = 5
TOP_SEARCH_RESULTS = 5

# GitHub linguist colors
LANGUAGE_COLORS: dict[str, str] = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python": "#3572A5",
    "Java": "#b07219",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#178600",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "PHP": "#4F5D95",
    "Ruby": "#701516",
    "Swift": "#ffac45",
    "Kotlin": "#A97BFF",
    "Dart": "#00B4AB",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "Shell": "#89e051",
    "PowerShell": "#012456",
    "Dockerfile": "#384d54",
    "Lua": "#000080",
}
DEFAULT_LANGUAGE_COLOR = "#8257e6"

_TAG_RE = re.compile(r"<[^>]*>")
_RICH_HTML_MARKERS = ("<table", "<img", "<h", "<pre", "<code")


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------

def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def hex_to_rgb(color: str) -> str:
    """``#3572A5`` -> ``53;114;165`` (ANSI truecolor parameter form)."""
    color = color.lstrip("#")
    r, g, b = (int(color[i:i + 2], 16) for i in (0, 2, 4))
    return f"{r};{g};{b}"


def progress_bar(percentage: float, color: str) -> str:
    """20-block bar in an ``ansi`` code block, one block per 5%."""
    filled = min(20, int(percentage // 5))
    bar = "█" * filled + "░" * (20 - filled)
    return (
        f"```ansi\n\u001b[38;2;{hex_to_rgb(color)}m{bar} {percentage:.1f}%\u001b[0m```"
    )


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def search_url(query: str, kind: str) -> str:
    return f"https://github.com/search?q={quote(query, safe='')}&type={kind}"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def _add_field_within_budget(embed: discord.Embed, name: str, value: str, inline: bool) -> bool:
    """Add a field unless it would push *embed* past Discord's total size limit."""
    if len(embed) + len(name) + len(value) > MAX_EMBED_TOTAL:
        return False
    embed.add_field(name=name, value=value, inline=inline)
    return True


def _repo_summary(repo: dict[str, Any]) -> str:
    return (
        f"{repo.get('description') or 'No description'}\n"
        f"⭐ {repo.get('stargazers_count', 0)} | 🍴 {repo.get('forks_count', 0)} | "
        f"[View]({repo.get('html_url', '')})"
    )


# ---------------------------------------------------------------------------
# /repo
# ---------------------------------------------------------------------------

def build_repo_embed(repo: dict[str, Any], languages: dict[str, int]) -> discord.Embed:
    embed = discord.Embed(
        title=repo.get("name", ""),
        description=repo.get("description") or "No description provided",
        color=GREEN,
        url=repo.get("html_url"),
    )
    license_info = repo.get("license") or {}
    embed.add_field(name="Stars", value=str(repo.get("stargazers_count", 0)), inline=True)
    embed.add_field(name="Forks", value=str(repo.get("forks_count", 0)), inline=True)
    embed.add_field(name="Watchers", value=str(repo.get("watchers_count", 0)), inline=True)
    embed.add_field(name="Open Issues", value=str(repo.get("open_issues_count", 0)), inline=True)
    embed.add_field(name="License", value=license_info.get("name") or "None", inline=True)
    embed.add_field(name="Default Branch", value=repo.get("default_branch") or "unknown", inline=True)

    avatar = (repo.get("owner") or {}).get("avatar_url")
    if avatar:
        embed.set_thumbnail(url=avatar)

    total = sum(languages.values())
    if total > 0:
        ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)
        for lang, size in ranked[:TOP_LANGUAGES]:
            color = LANGUAGE_COLORS.get(lang, DEFAULT_LANGUAGE_COLOR)
            embed.add_field(name=lang, value=progress_bar(size / total * 100, color), inline=False)
    else:
        embed.add_field(name="Languages", value="No languages detected", inline=False)
    return embed


def build_contributors_embed(
    full_name: str, contributors: list[dict[str, Any]]
) -> discord.Embed | None:
    if not contributors:
        return None
    embed = discord.Embed(title=f"Top Contributors for {full_name}", color=GITHUB_BLUE)
    for contributor in contributors[:TOP_CONTRIBUTORS]:
        embed.add_field(
            name=f"{contributor.get('login')} ({contributor.get('contributions', 0)} commits)",
            value=f"[GitHub Profile]({contributor.get('html_url', '')})",
            inline=True,
        )
    avatar = contributors[0].get("avatar_url")
    if avatar:
        embed.set_thumbnail(url=avatar)
    return embed


# ---------------------------------------------------------------------------
# /user
# ---------------------------------------------------------------------------

def build_user_embed(user: dict[str, Any]) -> discord.Embed:
    embed = discord.Embed(
        title=user.get("name") or user.get("login", ""),
        url=user.get("html_url"),
        color=GITHUB_BLUE,
    )
    if user.get("avatar_url"):
        embed.set_thumbnail(url=user["avatar_url"])
    embed.add_field(name="Bio", value=user.get("bio") or "No bio provided", inline=False)
    embed.add_field(name="Followers", value=str(user.get("followers", 0)), inline=True)
    embed.add_field(name="Following", value=str(user.get("following", 0)), inline=True)
    embed.add_field(name="Public Repos", value=str(user.get("public_repos", 0)), inline=True)

    for key, label in (("location", "Location"), ("company", "Company"), ("blog", "Website")):
        if user.get(key):
            embed.add_field(name=label, value=str(user[key]), inline=True)

    created = parse_timestamp(user.get("created_at"))
    if created is not None:
        embed.add_field(
            name="Account Created",
            value=discord.utils.format_dt(created, "R"),
            inline=True,
        )
    return embed


def build_user_repos_embed(login: str, repos: list[dict[str, Any]]) -> discord.Embed | None:
    if not repos:
        return None
    embed = discord.Embed(title=f"{login}'s Top Repositories", color=GREEN)
    for repo in repos[:MAX_FIELDS]:
        summary = truncate(_repo_summary(repo), MAX_FIELD_VALUE)
        if not _add_field_within_budget(embed, repo.get("name", ""), summary, inline=False):
            break
    return embed


def build_contributions_embed(login: str, contributions: dict[str, Any]) -> discord.Embed:
    embed = discord.Embed(title=f"{login}'s Contributions", color=PURPLE)
    for key, label in (
        ("totalCommitContributions", "Commits"),
        ("totalIssueContributions", "Issues"),
        ("totalPullRequestContributions", "Pull Requests"),
        ("totalPullRequestReviewContributions", "Reviews"),
    ):
        embed.add_field(name=label, value=str(contributions.get(key, 0)), inline=True)
    return embed


# ---------------------------------------------------------------------------
# /pr
# ---------------------------------------------------------------------------

def build_pull_list_embed(full_name: str, pulls: list[dict[str, Any]]) -> discord.Embed:
    embed = discord.Embed(title=f"Open Pull Requests in {full_name}", color=GREEN)
    for pr in pulls[:MAX_FIELDS]:
        login = (pr.get("user") or {}).get("login", "unknown")
        name = truncate(f"#{pr.get('number')}: {pr.get('title', '')}", 256)
        value = f"By: {login}\nStatus: {pr.get('state')}\n[View PR]({pr.get('html_url', '')})"
        if not _add_field_within_budget(embed, name, value, inline=False):
            break
    return embed


def build_pull_embed(pr: dict[str, Any]) -> discord.Embed:
    embed = discord.Embed(
        title=truncate(f"PR #{pr.get('number')}: {pr.get('title', '')}", 256),
        description=truncate(pr.get("body") or "No description provided", 4096),
        color=GREEN,
        url=pr.get("html_url"),
    )
    embed.add_field(name="Author", value=(pr.get("user") or {}).get("login") or "Unknown", inline=True)
    embed.add_field(name="Status", value=str(pr.get("state")), inline=True)
    for key, label in (("created_at", "Created"), ("updated_at", "Last Updated")):
        stamp = parse_timestamp(pr.get(key))
        value = discord.utils.format_dt(stamp, "d") if stamp else "unknown"
        embed.add_field(name=label, value=value, inline=True)
    embed.add_field(name="Commits", value=str(pr.get("commits", 0)), inline=True)
    embed.add_field(name="Changed Files", value=str(pr.get("changed_files", 0)), inline=True)
    return embed


# ---------------------------------------------------------------------------
# /search
# ---------------------------------------------------------------------------

def build_code_search_embed(query: str, results: dict[str, Any]) -> discord.Embed:
    total = results.get("total_count", 0)
    embed = discord.Embed(
        title=truncate(f"Code Search Results: {query}", 256),
        description=f"Found {total} code {_plural(total, 'result', 'results')}",
        color=GITHUB_BLUE,
    )
    embed.set_footer(text="GitHub Code Search")
    for index, item in enumerate(results.get("items", [])[:TOP_SEARCH_RESULTS], start=1):
        repo = item.get("repository") or {}
        full_name = repo.get("full_name", "")
        embed.add_field(
            name=truncate(f"{index}. {full_name}: {item.get('path', '')}", 256),
            value=(
                f"[View Code]({item.get('html_url', '')})\n"
                f"Repository: [{full_name}]({repo.get('html_url', '')})"
            ),
            inline=False,
        )
    return embed


def build_repo_search_embed(query: str, results: dict[str, Any]) -> discord.Embed:
    total = results.get("total_count", 0)
    embed = discord.Embed(
        title=truncate(f"Repository Search Results: {query}", 256),
        description=f"Found {total} {_plural(total, 'repository', 'repositories')}",
        color=GITHUB_BLUE,
    )
    embed.set_footer(text="GitHub Repository Search")
    for index, repo in enumerate(results.get("items", [])[:TOP_SEARCH_RESULTS], start=1):
        embed.add_field(
            name=f"{index}. {repo.get('full_name', '')}",
            value=truncate(_repo_summary(repo), MAX_FIELD_VALUE),
            inline=False,
        )
    return embed


# ---------------------------------------------------------------------------
# /markdown
# ---------------------------------------------------------------------------

PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Markdown Preview</title>
  <style>
    body {{
      font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
      line-height: 1.6;
      color: #24292e;
      max-width: 800px;
      margin: 0 auto;
      padding: 20px;
    }}
    pre, code {{
      background-color: #f6f8fa;
      border-radius: 3px;
      padding: 0.2em 0.4em;
      font-family: SFMono-Regular, Consolas, "Liberation Mono", Menlo, monospace;
    }}
    pre {{ padding: 16px; }}
    pre code {{ background-color: transparent; padding: 0; }}
    a {{ color: #0366d6; text-decoration: none; }}
    a:hover {{ text-decoration: underline; }}
    table {{ border-collapse: collapse; width: 100%; }}
    table th, table td {{ padding: 6px 13px; border: 1px solid #dfe2e5; }}
    table tr {{ background-color: #fff; border-top: 1px solid #c6cbd1; }}
    table tr:nth-child(2n) {{ background-color: #f6f8fa; }}
    img {{ max-width: 100%; }}
  </style>
</head>
<body>
{body}
</body>
</html>
"""


def needs_html_preview(rendered: str) -> bool:
    """True when the rendered HTML has structure an embed can't show."""
    return any(marker in rendered for marker in _RICH_HTML_MARKERS)


def strip_html(rendered: str) -> str:
    return html.unescape(_TAG_RE.sub("", rendered))


def html_preview_document(rendered: str) -> str:
    return PREVIEW_TEMPLATE.format(body=rendered)


def build_markdown_embed(source: str, rendered: str | None = None) -> discord.Embed:
    embed = discord.Embed(title="Markdown Preview", color=GITHUB_BLUE)
    embed.add_field(name="Source", value=truncate(source, 1000), inline=False)
    if rendered is not None:
        text = strip_html(rendered).strip() or "\u200b"
        embed.add_field(name="Rendered", value=truncate(text, MAX_FIELD_VALUE), inline=False)
    return embed
