# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""In-process event bus used to announce state changes.

Subscribers use these events to drop cached permission snapshots and to
invalidate meeting, series and point views after a closure.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class AppEvent(str, Enum):
    """Events published by the services."""

    MEETING_CLOSED = "meeting.closed"
    SERIES_CLOSED = "series.closed"
    POINTS_CLOSED = "points.closed"
    POINTS_MOVED = "points.moved"
    PERMISSIONS_CHANGED = "permissions.changed"


@dataclass
class EventPayload:
    """Payload delivered to subscribers."""

    event_type: AppEvent
    timestamp: datetime
    data: dict[str, Any]


EventHandler = Callable[[EventPayload], Any]


class EventBus:
    """Fan-out of application events to handlers, in subscription order.

    Services publish from their request thread after committing. A failing
    handler is logged and never affects the publisher or the other handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[AppEvent, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: AppEvent, handler: EventHandler) -> None:
        """Subscribe ``handler`` to ``event_type``."""
        self._handlers[event_type].append(handler)
        logger.debug(f"Subscribed {handler!r} to event {event_type.value}")

    def unsubscribe(self, event_type: AppEvent, handler: EventHandler) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def clear(self) -> None:
        """Remove every subscription."""
        self._handlers.clear()

    def publish(self, event_type: AppEvent, data: dict[str, Any]) -> None:
        """Call every handler subscribed to ``event_type``."""
        payload = EventPayload(
            event_type=event_type,
            timestamp=datetime.now(timezone.utc),
            data=data,
        )
        for handler in list(self._handlers.get(event_type, [])):
            try:
                handler(payload)
            except Exception as e:
                logger.error(f"Error in event handler for {event_type.value}: {e}")


# Global event bus singleton
event_bus = EventBus()
