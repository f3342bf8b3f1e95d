"""Notification port.

The core only announces events; delivery (internal inbox, e-mail) belongs
to infrastructure. A failing dispatcher never undoes the operation that
triggered it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(Enum):
    ORDER_CREATED = "ORDER_CREATED"
    ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"
    LOW_STOCK = "LOW_STOCK"
    ORDER_REMINDER = "ORDER_REMINDER"


class NotificationDispatcher(ABC):

    @abstractmethod
    def dispatch(self, event_type: EventType, payload: dict[str, Any]) -> None:
        """Deliver one event."""


def notify_safely(
    dispatcher: NotificationDispatcher | None,
    event_type: EventType,
    payload: dict[str, Any],
) -> bool:
    """Dispatch and report success; errors are logged, never raised."""
    if dispatcher is None:
        return False
    try:
        dispatcher.dispatch(event_type, payload)
    except Exception:
        logger.exception("Failed to dispatch %s notification", event_type.value)
        return False
    return True
