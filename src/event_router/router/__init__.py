"""Event Router for Decoupled Component Communication.

This module provides an in-process publish/subscribe router that lets
components exchange named events without holding references to one
another. It supports:

- **Named Events**: Events are plain strings or Enum members, nothing has to
  be declared up front
- **Id Filtering**: Subscribers can narrow delivery to one id of an event
- **Arbitrary Payloads**: Any number of values travel with an event and are
  interpreted by the receiver
- **Synchronous Dispatch**: Handlers run in the publisher's call stack
- **Singleton Pattern**: Global router instance via @lru_cache

## Quick Start

```python
from enum import Enum

from event_router.router import Event, get_event_router


class SenderEvent(Enum):
    TEST = "test"


class Sender:
    def send(self) -> None:
        get_event_router().publish(SenderEvent.TEST, self, "Hello World")


class Receiver:
    def __init__(self) -> None:
        get_event_router().subscribe(SenderEvent.TEST, self.on_sender_event)

    def on_sender_event(self, event: Event) -> None:
        if event.has_data:
            print(f"Received {event.type} from {event.sender} with data: {event.data[0]}")
        else:
            print(f"Received {event.type} from {event.sender} with no data")
```

## Filtering by id

```python
router = get_event_router()
router.subscribe(SenderEvent.TEST, on_a, event_id="A")
router.subscribe(SenderEvent.TEST, on_b, event_id="B")

router.publish(SenderEvent.TEST, sender, "Hello World", event_id="A")  # only on_a
```

Subscribing without an id receives every event of that name, whatever id it
was published with.

For the registry layout, see `registry.py`.
For the API reference, see `bus.py`.

"""

from .bus import EventRouter, get_event_router
from .core import (
    CleanupPolicy,
    Event,
    EventRouterError,
    Handler,
    HandlerRegistrationError,
    HandlerSet,
    InvalidEventNameError,
)

__all__ = [
    "CleanupPolicy",
    "Event",
    "EventRouter",
    "EventRouterError",
    "Handler",
    "HandlerRegistrationError",
    "HandlerSet",
    "InvalidEventNameError",
    "get_event_router",
]
