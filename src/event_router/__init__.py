"""In-process publish/subscribe event router.

The module-level functions act on the process-wide router returned by
``get_event_router``.
"""

from typing import Any

from .keys import event_key, resolve_event_name
from .router import (
    CleanupPolicy,
    Event,
    EventRouter,
    EventRouterError,
    Handler,
    HandlerRegistrationError,
    HandlerSet,
    InvalidEventNameError,
    get_event_router,
)
from .router.bus import EventName
from .settings import Settings, get_settings


def subscribe(name: EventName, handler: Handler, *, event_id: str = "") -> None:
    get_event_router().subscribe(name, handler, event_id=event_id)


def unsubscribe(name: EventName, handler: Handler, *, event_id: str = "") -> None:
    get_event_router().unsubscribe(name, handler, event_id=event_id)


def publish(name: EventName, sender: Any = None, *data: Any, event_id: str = "") -> None:
    get_event_router().publish(name, sender, *data, event_id=event_id)


def clear() -> None:
    """Remove every subscription from the process-wide router."""
    get_event_router().clear()


__all__ = [
    "CleanupPolicy",
    "Event",
    "EventRouter",
    "EventRouterError",
    "Handler",
    "HandlerRegistrationError",
    "HandlerSet",
    "InvalidEventNameError",
    "Settings",
    "clear",
    "event_key",
    "get_event_router",
    "get_settings",
    "publish",
    "resolve_event_name",
    "subscribe",
    "unsubscribe",
]
