"""Transient user-facing notifications."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    variant: str = DEFAULT


NotificationListener = Callable[[Notification], None]


class NotificationCenter:
    """Collects notifications and fans them out to subscribed listeners."""

    def __init__(self) -> None:
        self._history: List[Notification] = []
        self._listeners: List[NotificationListener] = []

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, title: str, description: str = "", variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        if variant == DESTRUCTIVE:
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}" if description else title)
        self._history.append(notification)
        for listener in list(self._listeners):
            listener(notification)
        return notification

    def error(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, variant=DESTRUCTIVE)

    def clear(self) -> None:
        self._history.clear()
