"""Route verified webhook events to their formatter."""

from __future__ import annotations

from typing import Any, Callable

from gitcord.errors import FormatterError, UnsupportedEvent
from gitcord.models import NotificationMessage
from gitcord.utils.logging import get_logger
from gitcord.webhooks.formatters import (
    format_issues,
    format_pull_request,
    format_push,
    format_workflow_run,
)
from gitcord.webhooks.models import EventKind, VerifiedEvent

log = get_logger(__name__)

Formatter = Callable[[dict[str, Any]], "NotificationMessage | None"]


def formatter_for(event: VerifiedEvent) -> Formatter:
    """Return the formatter for *event* or raise :class:`UnsupportedEvent`."""
    if event.kind is EventKind.PUSH:
        return format_push
    if event.kind is EventKind.PULL_REQUEST:
        return format_pull_request
    if event.kind is EventKind.ISSUES:
        return format_issues
    if event.kind is EventKind.WORKFLOW_RUN:
        return format_workflow_run
    raise UnsupportedEvent(event.event_type)


def dispatch(event: VerifiedEvent) -> NotificationMessage | None:
    """Format *event* into a notification.

    Returns None for unsupported event types and for payloads missing the
    object the event describes. Raises :class:`FormatterError` when the
    payload has the wrong shape.
    """
    try:
        formatter = formatter_for(event)
    except UnsupportedEvent:
        log.info("webhook_event_unhandled", event_type=event.event_type)
        return None

    if not isinstance(event.payload, dict):
        raise FormatterError(
            f"payload must be an object, got {type(event.payload).__name__}"
        )

    message = formatter(event.payload)
    if message is None:
        log.warning(
            "webhook_event_incomplete",
            event_type=event.event_type,
            action=event.payload.get("action"),
        )
    return message
