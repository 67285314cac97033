"""Exception hierarchy shared by the webhook receiver, notifier and bot."""

from __future__ import annotations


class GitCordError(Exception):
    """Base class for all gitcord errors."""


class AuthError(GitCordError):
    """Webhook signature missing or invalid."""


class UnsupportedEvent(GitCordError):
    """GitHub event type with no formatter. Logged, never surfaced as a failure."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"Unsupported event type: {event_type}")
        self.event_type = event_type


class FormatterError(GitCordError):
    """Webhook payload has the wrong shape for its event type."""


class DownstreamError(GitCordError):
    """Sending a notification to Discord failed."""


class GitHubError(GitCordError):
    """A GitHub API request failed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
