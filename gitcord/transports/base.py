"""Abstract notifier base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gitcord.models import NotificationMessage


class Notifier(ABC):
    """A fixed chat destination that accepts notification messages."""

    @property
    @abstractmethod
    def platform_name(self) -> str: ...

    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> None:
        """Deliver *message*. Raises :class:`DownstreamError` on failure."""
        ...
