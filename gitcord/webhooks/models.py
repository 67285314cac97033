"""Webhook event models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventKind(str, Enum):
    PUSH = "push"
    PULL_REQUEST = "pull_request"
    ISSUES = "issues"
    WORKFLOW_RUN = "workflow_run"
    OTHER = "other"

    @classmethod
    def from_header(cls, value: str) -> EventKind:
        """Map an ``X-GitHub-Event`` header value to a kind."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class InboundWebhook:
    raw_body: bytes
    event_type: str
    signature: str


@dataclass
class VerifiedEvent:
    kind: EventKind
    event_type: str
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_inbound(cls, inbound: InboundWebhook, payload: dict[str, Any]) -> VerifiedEvent:
        return cls(
            kind=EventKind.from_header(inbound.event_type),
            event_type=inbound.event_type,
            payload=payload,
        )
