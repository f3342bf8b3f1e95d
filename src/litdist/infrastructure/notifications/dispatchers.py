"""Notification dispatchers.

``JsonNotificationOutbox`` is the internal channel: notifications are
appended to ``notifications.json`` where the UI picks them up.
``LoggingDispatcher`` only writes a log line, and ``FanOutDispatcher``
sends to several dispatchers, isolating failures between them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from litdist.domain.service.notifications import EventType, NotificationDispatcher
from litdist.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)

_SUBJECTS = {
    EventType.ORDER_CREATED: "New order {order_number}",
    EventType.ORDER_STATUS_CHANGED: "Order {order_number}: {old_status} -> {new_status}",
    EventType.ORDER_REMINDER: "Order {order_number} is still {status} after {days_since_created} days",
    EventType.LOW_STOCK: "Low stock of literature {literature_id} at {organization_id}",
}


def render_subject(event_type: EventType, payload: dict[str, Any]) -> str:
    try:
        return _SUBJECTS[event_type].format(**payload)
    except KeyError:
        return event_type.value


class LoggingDispatcher(NotificationDispatcher):

    def dispatch(self, event_type: EventType, payload: dict[str, Any]) -> None:
        logger.info("Notification %s: %s", event_type.value, render_subject(event_type, payload))


class JsonNotificationOutbox(NotificationDispatcher):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def dispatch(self, event_type: EventType, payload: dict[str, Any]) -> None:
        with self._file.update() as records:
            records.append(
                {
                    "id": max((r["id"] for r in records), default=0) + 1,
                    "type": event_type.value,
                    "subject": render_subject(event_type, payload),
                    "payload": payload,
                    "is_read": False,
                    "created_at": datetime.now(timezone.utc).isoformat(),
                }
            )

    def list_all(self) -> list[dict]:
        return self._file.load()


class FanOutDispatcher(NotificationDispatcher):

    def __init__(self, *dispatchers: NotificationDispatcher) -> None:
        self._dispatchers = dispatchers

    def dispatch(self, event_type: EventType, payload: dict[str, Any]) -> None:
        errors = []
        for dispatcher in self._dispatchers:
            try:
                dispatcher.dispatch(event_type, payload)
            except Exception as exc:
                logger.exception("%s failed for %s", type(dispatcher).__name__, event_type.value)
                errors.append(exc)
        if errors and len(errors) == len(self._dispatchers):
            raise errors[0]
