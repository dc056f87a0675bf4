"""
User notifications for the Creator Curation Pipeline
"""

from .notification_controller import Notification, NotificationController, NotificationKind

__all__ = ["Notification", "NotificationController", "NotificationKind"]
