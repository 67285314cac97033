"""Map GitHub webhook payloads to Discord notification messages.

Each formatter takes the decoded payload of one event type and returns a
:class:`NotificationMessage`, or ``None`` when the payload lacks the nested
object the event is about (a ``pull_request`` event without
``pull_request``). Optional values that are missing render as ``"unknown"``.
A required value of the wrong JSON type raises :class:`FormatterError`.
"""

from __future__ import annotations

from typing import Any

from gitcord.errors import FormatterError
from gitcord.models import (
    BLURPLE,
    GREEN,
    PURPLE,
    RED,
    UNKNOWN,
    YELLOW,
    EmbedField,
    NotificationMessage,
)

PULL_REQUEST_COLORS: dict[str, int] = {
    "opened": GREEN,
    "closed": RED,
    "merged": PURPLE,
}

ISSUE_COLORS: dict[str, int] = {
    "opened": GREEN,
    "closed": RED,
    "reopened": YELLOW,
}

WORKFLOW_COLORS: dict[str, int] = {
    "completed": GREEN,
    "in_progress": YELLOW,
    "failed": RED,
}

_REF_PREFIXES = ("refs/heads/", "refs/tags/")


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

def _require_object(payload: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise FormatterError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _optional_str(value: Any) -> str:
    if value is None or value == "":
        return UNKNOWN
    return str(value)


def _nested(obj: dict[str, Any], *path: str) -> Any:
    current: Any = obj
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _verb(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise FormatterError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _capitalize(verb: str) -> str:
    if not verb:
        return "Unknown"
    return verb[0].upper() + verb[1:]


def _link(text: Any, url: Any) -> str:
    label = _optional_str(text)
    if not url:
        return label
    return f"[{label}]({url})"


def _repository_name(payload: dict[str, Any]) -> str:
    return _optional_str(_nested(payload, "repository", "full_name"))


def branch_from_ref(ref: Any) -> str:
    """``refs/heads/main`` -> ``main``; anything empty -> ``"unknown"``."""
    if not isinstance(ref, str) or not ref:
        return UNKNOWN
    for prefix in _REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):] or UNKNOWN
    return ref


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

def pull_request_color(action: str) -> int:
    return PULL_REQUEST_COLORS.get(action, BLURPLE)


def issue_color(action: str) -> int:
    return ISSUE_COLORS.get(action, BLURPLE)


def workflow_color(status: str) -> int:
    return WORKFLOW_COLORS.get(status, BLURPLE)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_push(payload: dict[str, Any]) -> NotificationMessage | None:
    repository = _require_object(payload, "repository")
    if repository is None:
        return None

    commits = payload.get("commits")
    count = len(commits) if isinstance(commits, list) else 0

    return NotificationMessage(
        title="New Push",
        description=_link(repository.get("full_name"), repository.get("html_url")),
        color=GREEN,
        fields=(
            EmbedField("Branch", branch_from_ref(payload.get("ref"))),
            EmbedField("Commits", str(count)),
            EmbedField("Pusher", _optional_str(_nested(payload, "pusher", "name"))),
        ),
    )


def format_pull_request(payload: dict[str, Any]) -> NotificationMessage | None:
    pr = _require_object(payload, "pull_request")
    if pr is None:
        return None

    action = _verb(payload, "action")
    return NotificationMessage(
        title=f"Pull Request {_capitalize(action)}",
        description=_link(pr.get("title"), pr.get("html_url")),
        color=pull_request_color(action),
        fields=(
            EmbedField("Repository", _repository_name(payload)),
            EmbedField("Author", _optional_str(_nested(pr, "user", "login"))),
            EmbedField("State", _optional_str(pr.get("state"))),
        ),
    )


def format_issues(payload: dict[str, Any]) -> NotificationMessage | None:
    issue = _require_object(payload, "issue")
    if issue is None:
        return None

    action = _verb(payload, "action")
    return NotificationMessage(
        title=f"Issue {_capitalize(action)}",
        description=_link(issue.get("title"), issue.get("html_url")),
        color=issue_color(action),
        fields=(
            EmbedField("Repository", _repository_name(payload)),
            EmbedField("Author", _optional_str(_nested(issue, "user", "login"))),
            EmbedField("State", _optional_str(issue.get("state"))),
        ),
    )


def format_workflow_run(payload: dict[str, Any]) -> NotificationMessage | None:
    run = _require_object(payload, "workflow_run")
    if run is None:
        return None

    status = _verb(run, "status")
    return NotificationMessage(
        title=f"Workflow {_capitalize(status)}",
        description=_link(run.get("name"), run.get("html_url")),
        color=workflow_color(status),
        fields=(
            EmbedField("Repository", _repository_name(payload)),
            EmbedField("Branch", _optional_str(run.get("head_branch"))),
            EmbedField("Triggered by", _optional_str(_nested(run, "actor", "login"))),
        ),
    )
