"""
User-visible notifications (toasts).

The core fires `{title, description, severity}` at a sink and never
looks at a result. The default sink writes them to the log; the API
layer can be handed any object with a `notify` method.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: Severity = Severity.INFO

    def to_dict(self) -> dict:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LogNotifier:
    """Sink that records each notification as a log line."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.severity == Severity.ERROR else logging.INFO
        logger.log(level, "%s: %s", notification.title, notification.description)
