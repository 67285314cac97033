"""GitHub webhook receiver."""

from gitcord.webhooks.dispatcher import dispatch
from gitcord.webhooks.handlers import verify_signature
from gitcord.webhooks.models import EventKind, InboundWebhook, VerifiedEvent

__all__ = [
    "EventKind",
    "InboundWebhook",
    "VerifiedEvent",
    "dispatch",
    "verify_signature",
]
