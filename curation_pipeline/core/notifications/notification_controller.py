"""
Notification Controller
Single-slot status/modal state surfaced to the user.
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    ERROR = "error"
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    is_open: bool
    kind: NotificationKind = NotificationKind.INFO
    message: str = ""


CLOSED = Notification(is_open=False)


class NotificationController:
    """
    Two states: closed, or open with one (kind, message).

    show() always wins and overwrites whatever is open; there is no
    queue and no timer. dismiss() is the only way back to closed.
    """

    def __init__(self):
        self._state = CLOSED

    @property
    def state(self) -> Notification:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    def show(self, kind: NotificationKind, message: str) -> Notification:
        kind = NotificationKind(kind)
        if self._state.is_open:
            logger.debug(f"Replacing open {self._state.kind.value} notification")
        self._state = Notification(is_open=True, kind=kind, message=message)
        return self._state

    def error(self, message: str) -> Notification:
        return self.show(NotificationKind.ERROR, message)

    def info(self, message: str) -> Notification:
        return self.show(NotificationKind.INFO, message)

    def success(self, message: str) -> Notification:
        return self.show(NotificationKind.SUCCESS, message)

    def dismiss(self) -> None:
        self._state = CLOSED
