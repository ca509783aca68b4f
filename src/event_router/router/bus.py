"""Event Router Implementation.

This module provides the EventRouter class that handles subscriptions and
synchronous event dispatch, plus the process-wide router returned by
``get_event_router``.

## Key Features

- **Id Filtering**: Subscribe to every event of a name, or only to one id
- **Wildcard Pass**: Unscoped subscribers see every publish of their name
- **Synchronous Dispatch**: ``publish`` returns once every handler has run
- **Re-entrancy**: Handlers may subscribe, unsubscribe and publish
- **Thread Safety**: Registry access is serialized by a lock that is never
  held while handlers run
- **Singleton Pattern**: Global instance via @lru_cache

## Advanced Usage

```python
from enum import Enum

from event_router.router import Event, get_event_router


class DoorEvent(Enum):
    OPENED = "opened"


def on_any_door(event: Event) -> None:
    print(f"{event.type} from {event.sender}")


def on_front_door(event: Event) -> None:
    if event.has_data:
        print(f"front door opened by {event.get_data(0, str)}")


router = get_event_router()
router.subscribe(DoorEvent.OPENED, on_any_door)
router.subscribe(DoorEvent.OPENED, on_front_door, event_id="front")

# on_any_door runs first, then on_front_door
router.publish(DoorEvent.OPENED, door, "alice", event_id="front")

# Only on_any_door runs
router.publish(DoorEvent.OPENED, door, event_id="back")
```

"""

import threading
from enum import Enum
from functools import lru_cache
from typing import Any

from loguru import logger

from ..keys import resolve_event_name
from .core import CleanupPolicy, Event, Handler, HandlerRegistrationError, InvalidEventNameError
from .registry import HandlerRegistry

EventName = str | Enum


class EventRouter:
    """In-process publish/subscribe router.

    Handlers are registered under an event name and an optional id. Events
    published with an id reach the handlers subscribed with that id and, in
    an earlier pass, the handlers subscribed without one.

    Example:
        ```python
        router = get_event_router()
        router.subscribe("Test", on_test)
        router.publish("Test", self, "Hello World")
        ```
    """

    def __init__(
        self,
        cleanup_policy: CleanupPolicy = CleanupPolicy.BUCKET,
        isolate_errors: bool = False,
    ) -> None:
        """Initialize a new EventRouter instance.

        Args:
            cleanup_policy: What unsubscribe removes once a handler group
                           empties. Default only removes that group.
            isolate_errors: If True, a failing handler is logged and the
                           remaining handlers still run. Default is False,
                           the exception aborts the publish call.
        """
        self._registry = HandlerRegistry(cleanup_policy)
        self._isolate_errors = isolate_errors
        self._lock = threading.RLock()
        logger.debug(f"EventRouter initialized (cleanup_policy={self._registry.cleanup_policy}, isolate_errors={isolate_errors})")

    @property
    def cleanup_policy(self) -> CleanupPolicy:
        return self._registry.cleanup_policy

    @property
    def isolate_errors(self) -> bool:
        return self._isolate_errors

    def subscribe(self, name: EventName, handler: Handler, *, event_id: str = "") -> None:
        """Register a handler for an event name, optionally filtered by id.

        Subscribing the same handler twice makes it run twice per publish.

        Args:
            name: The event name or an Enum member naming it
            handler: Callable invoked with the Event
            event_id: Only receive events published with this id. The
                     default ``""`` receives every event of the name.

        Raises:
            HandlerRegistrationError: If handler is not callable
            InvalidEventNameError: If name or event_id has the wrong type
        """
        if not callable(handler):
            raise HandlerRegistrationError(f"Handler must be callable: {handler!r}")
        key = self._resolve(name, event_id)

        with self._lock:
            self._registry.add(key, event_id, handler)
        logger.debug(f"Subscribed {handler!r} to {key!r} (id={event_id!r})")

    def unsubscribe(self, name: EventName, handler: Handler, *, event_id: str = "") -> None:
        """Remove a handler previously subscribed with the same name and id.

        Unknown names, ids and handlers are ignored.

        Args:
            name: The event name or an Enum member naming it
            handler: The handler to remove
            event_id: The id the handler was subscribed with

        Raises:
            InvalidEventNameError: If name or event_id has the wrong type
        """
        key = self._resolve(name, event_id)

        with self._lock:
            removed = self._registry.remove(key, event_id, handler)

        if removed:
            logger.debug(f"Unsubscribed {handler!r} from {key!r} (id={event_id!r})")
        else:
            logger.trace(f"Nothing to unsubscribe for {handler!r} on {key!r} (id={event_id!r})")

    def publish(self, name: EventName, sender: Any = None, *data: Any, event_id: str = "") -> None:
        """Publish an event and run the matching handlers before returning.

        When ``event_id`` is set, the handlers subscribed without an id run
        first, receiving an Event whose id is ``""``. Then the handlers
        subscribed with exactly ``event_id`` run. Handlers of one group run
        in subscription order and share one Event instance. Handlers added
        while a group is running do not receive the event in flight.

        Args:
            name: The event name or an Enum member naming it
            sender: The event's sender, usually the caller itself
            *data: Arbitrary payload values interpreted by the receivers
            event_id: Restrict delivery to subscribers of this id

        Raises:
            InvalidEventNameError: If name or event_id has the wrong type
        """
        key = self._resolve(name, event_id)

        if event_id:
            self._dispatch(key, "", sender, data)
        self._dispatch(key, event_id, sender, data)

    def clear(self) -> None:
        """Remove every subscription for every name and id."""
        with self._lock:
            self._registry.clear()
        logger.debug("Cleared all subscriptions")

    def get_handler_count(self, name: EventName, *, event_id: str = "") -> int:
        """Get the number of handlers subscribed under the exact name and id."""
        key = self._resolve(name, event_id)
        with self._lock:
            return self._registry.count(key, event_id)

    def get_registered_events(self) -> list[str]:
        """Get all event names that have at least one subscribed handler.

        Returns:
            List of resolved event names

        Example:
            ```python
            for name in router.get_registered_events():
                print(f"{name}: {router.get_registered_ids(name)}")
            ```
        """
        with self._lock:
            return self._registry.names()

    def get_registered_ids(self, name: EventName) -> list[str]:
        """Get the ids with subscribed handlers under an event name."""
        key = self._resolve(name, "")
        with self._lock:
            return self._registry.ids(key)

    def has_subscribers(self, name: EventName, *, event_id: str | None = None) -> bool:
        """Check whether anything listens to a name, or to one of its ids."""
        key = self._resolve(name, event_id or "")
        with self._lock:
            if event_id is None:
                return key in self._registry
            return self._registry.count(key, event_id) > 0

    def _resolve(self, name: EventName, event_id: str) -> str:
        if not isinstance(event_id, str):
            raise InvalidEventNameError(f"Event id must be a str, got: {type(event_id).__name__}")
        if not isinstance(name, str | Enum):
            raise InvalidEventNameError(f"Event name must be a str or Enum member, got: {type(name).__name__}")
        return resolve_event_name(name)

    def _dispatch(self, name: str, event_id: str, sender: Any, data: tuple[Any, ...]) -> None:
        """Run the handlers of one (name, id) group outside the lock."""
        with self._lock:
            handlers = self._registry.get(name, event_id)
            snapshot = handlers.snapshot() if handlers is not None else ()

        if not snapshot:
            logger.trace(f"No handlers for {name!r} (id={event_id!r})")
            return

        event = Event(type=name, id=event_id, sender=sender, data=data or None)
        logger.trace(f"Dispatching {name!r} (id={event_id!r}) to {len(snapshot)} handler(s)")

        for handler in snapshot:
            if not self._isolate_errors:
                handler(event)
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(f"Handler {handler!r} failed for {name!r} (id={event_id!r})")


@lru_cache
def get_event_router() -> EventRouter:
    """Get or create the process-wide EventRouter instance.

    The router is configured from ``get_settings()`` on first use.

    Returns:
        The EventRouter instance

    Example:
        ```python
        router = get_event_router()
        router.subscribe("Test", on_test)
        router.publish("Test", sender, "Hello World")
        ```
    """
    from ..settings import get_settings

    settings = get_settings()
    return EventRouter(
        cleanup_policy=settings.cleanup_policy,
        isolate_errors=settings.isolate_errors,
    )
