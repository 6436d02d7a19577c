"""Transient, self-dismissing notifications shown after user actions."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3.0


class NotificationVariant(str, Enum):
    SUCCESS = "success"
    DANGER = "danger"


class Notification(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    message: str
    variant: NotificationVariant = NotificationVariant.SUCCESS
    title: str = "Notification"
    created_at: float
    expires_at: float

    def remaining(self, now: float) -> float:
        return max(0.0, self.expires_at - now)


class NotificationCenter:
    """Holds at most one visible notification.

    A new notification replaces the current one. Each expires ``ttl_seconds``
    after it was raised, or earlier when dismissed.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._current: Notification | None = None

    def notify(
        self,
        message: str,
        variant: NotificationVariant = NotificationVariant.SUCCESS,
    ) -> Notification:
        now = self._clock()
        notification = Notification(
            message=message,
            variant=variant,
            created_at=now,
            expires_at=now + self._ttl,
        )
        self._current = notification
        logger.debug(f"Notification [{variant.value}] {message}")
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, NotificationVariant.SUCCESS)

    def danger(self, message: str) -> Notification:
        return self.notify(message, NotificationVariant.DANGER)

    def current(self) -> Notification | None:
        """Return the visible notification, dropping it once expired."""
        if self._current is not None and self._clock() >= self._current.expires_at:
            self._current = None
        return self._current

    def time_left(self, notification: Notification) -> float:
        return notification.remaining(self._clock())

    def dismiss(self, notification_id: str | None = None) -> bool:
        """Hide the current notification.

        With an id, only that notification is dismissed; a stale id from a
        replaced notification leaves the newer one visible.
        """
        current = self.current()
        if current is None:
            return False
        if notification_id is not None and notification_id != current.id:
            return False
        self._current = None
        return True
