from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtCore import QObject, Signal, Slot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warning/error


class AppState(QObject):
    """
    Notification channel shared by the view models. Passed in explicitly,
    never looked up globally.
    """
    notification = Signal(object)   # emits Notify

    def __init__(self, config=None, client=None):
        super().__init__()
        self.config = config
        self.client = client

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        if notify_type == "error":
            logger.error(message)
        else:
            logger.info(message)
        self.notification.emit(Notify(message=message, notify_type=notify_type))
