"""Notification message model shared by formatters and notifiers."""

from __future__ import annotations

from dataclasses import dataclass, field

# Embed palette
GREEN = 0x2EA043
RED = 0xCB2431
PURPLE = 0x6F42C1
YELLOW = 0xF1E05A
BLURPLE = 0x5865F2

UNKNOWN = "unknown"


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class NotificationMessage:
    title: str
    description: str
    color: int = BLURPLE
    fields: tuple[EmbedField, ...] = field(default_factory=tuple)

    def field_value(self, name: str) -> str | None:
        for f in self.fields:
            if f.name == name:
                return f.value
        return None
