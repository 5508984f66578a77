"""Content publication notifications."""

from src.notifications.dispatcher import NotificationDispatcher, Subscription
from src.notifications.models import ChangeEvent, ChangeType, ModerationStatus, NotifierConfig

__all__ = [
    "ChangeEvent",
    "ChangeType",
    "ModerationStatus",
    "NotificationDispatcher",
    "NotifierConfig",
    "Subscription",
]
