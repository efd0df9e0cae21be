"""
Notification Center - User-visible toasts and banners for one session.
Success toasts expire after a fixed duration; progress and error banners
stay until they are dismissed.
"""
import logging
import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """Kind of notification."""
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A single notification shown to the user."""
    notification_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    level: NotificationLevel
    message: str
    created_at: datetime = Field(default_factory=datetime.now)
    expires_at: Optional[datetime] = Field(
        None,
        description="When a transient notification disappears; None means persistent"
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def to_display_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "level": self.level.value,
            "message": self.message,
            "persistent": self.expires_at is None,
        }


class NotificationCenter:
    """Holds the notifications of one session in display order."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._items: dict[str, Notification] = {}

    def loading(self, message: str) -> Notification:
        """Show a persistent in-progress notification."""
        return self._add(NotificationLevel.LOADING, message)

    def success(self, message: str, duration_seconds: float) -> Notification:
        """Show a transient success toast."""
        expires_at = self._clock() + timedelta(seconds=duration_seconds)
        return self._add(NotificationLevel.SUCCESS, message, expires_at)

    def error(self, message: str) -> Notification:
        """Show an error banner that stays until dismissed."""
        return self._add(NotificationLevel.ERROR, message)

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification. Returns False if it was already gone."""
        return self._items.pop(notification_id, None) is not None

    def active(self) -> list[Notification]:
        """Notifications currently visible; expired toasts are dropped."""
        now = self._clock()
        for notification_id in [n.notification_id for n in self._items.values() if n.is_expired(now)]:
            del self._items[notification_id]
        return list(self._items.values())

    def _add(
        self,
        level: NotificationLevel,
        message: str,
        expires_at: Optional[datetime] = None
    ) -> Notification:
        notification = Notification(level=level, message=message, expires_at=expires_at)
        self._items[notification.notification_id] = notification
        logger.debug(f"Notification [{level.value}]: {message}")
        return notification
