"""Core Event Router Components.

This module contains the fundamental abstractions for the event router.
They carry no routing logic of their own and are shared by the registry
and the router.

## Key Components

- **Event**: Immutable record passed to every invoked handler
- **Handler**: Type of the callables that can be subscribed
- **HandlerSet**: Ordered multicast group of handlers for one (name, id) key
- **CleanupPolicy**: What unsubscribe removes once a handler group empties
- **EventRouterError**: Base exception for all event router related errors

## Usage Example

```python
from event_router.router.core import Event, HandlerSet

def log_event(event: Event) -> None:
    print(event.type, event.data)

def count_event(event: Event) -> None:
    ...

# Compose a multicast and subscribe it as a single handler
both = HandlerSet([log_event, count_event])
router.subscribe("Player.Died", both)
```

"""

from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Event(BaseModel):
    """Event record passed to the subscribers whenever an event is published.

    A new record is built for every dispatch pass and handed to each handler
    of the matching group. The router never keeps it afterwards.

    Attributes:
        type: The resolved event name
        id: The discriminator of this dispatch pass, ``""`` when unscoped
        sender: The publisher, usually the object calling ``publish``
        data: Payload values in publish order, ``None`` when there are none
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: str
    id: str = ""
    sender: Any = None
    data: tuple[Any, ...] | None = None

    @property
    def has_data(self) -> bool:
        """True if the event carries at least one payload value."""
        return self.data is not None and len(self.data) > 0

    def get_data(self, index: int, expected_type: type[T] | None = None) -> T:
        """Return one payload value, optionally checking its type.

        Args:
            index: Position of the value in the payload
            expected_type: If given, the value must be an instance of it

        Returns:
            The payload value at ``index``

        Raises:
            IndexError: If the event has no value at ``index``
            TypeError: If the value is not an instance of ``expected_type``
        """
        if self.data is None:
            raise IndexError(f"Event {self.type!r} carries no data")

        value = self.data[index]
        if expected_type is not None and not isinstance(value, expected_type):
            raise TypeError(
                f"Event {self.type!r} data[{index}] is {type(value).__name__}, expected {expected_type.__name__}"
            )
        return value


Handler = Callable[[Event], Any]


class HandlerSet:
    """Ordered multicast group of handlers.

    Handlers fire in the order they were added; the same handler may be
    added more than once and then fires once per addition. A ``HandlerSet``
    is itself a handler, so a composed group can be subscribed as one.
    """

    def __init__(self, handlers: Iterable[Handler] = ()) -> None:
        self._handlers: list[Handler] = list(handlers)

    def add(self, handler: Handler) -> None:
        self._handlers.append(handler)

    def remove(self, handler: Handler) -> bool:
        """Remove the most recently added occurrence of ``handler``.

        Handlers are matched with ``==``, so a bound method matches another
        bound method of the same function on the same instance.

        Returns:
            True if a handler was removed, False if none matched
        """
        for index in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[index] == handler:
                del self._handlers[index]
                return True
        return False

    def snapshot(self) -> tuple[Handler, ...]:
        """Return the current handlers as an immutable tuple."""
        return tuple(self._handlers)

    def __call__(self, event: Event) -> None:
        for handler in self.snapshot():
            handler(event)

    def __contains__(self, handler: object) -> bool:
        return handler in self._handlers

    def __iter__(self) -> Iterator[Handler]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return bool(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerSet({self._handlers!r})"


class CleanupPolicy(StrEnum):
    """What ``unsubscribe`` removes once the last handler of a key is gone.

    - ``BUCKET``: only the emptied (name, id) group; sibling ids under the
      same name keep their handlers. The name itself is dropped once it has
      no groups left.
    - ``EVENT``: the whole name entry, sibling ids included.
    """

    BUCKET = "bucket"
    EVENT = "event"


class EventRouterError(Exception):
    """Base exception for all event router related errors.

    Routing itself never fails: publishing to a name nobody listens to and
    unsubscribing an unknown handler are no-ops. These errors only report
    arguments of the wrong type.

    Use this for catching any event router related error:
        ```python
        try:
            router.subscribe(name, handler)
        except EventRouterError as e:
            logger.error(f"Event router error: {e}")
        ```
    """


class HandlerRegistrationError(EventRouterError):
    """Raised when a handler cannot be subscribed.

    This occurs when the handler is not callable.
    """


class InvalidEventNameError(EventRouterError):
    """Raised when an event name or id has the wrong type.

    This occurs when:
    - The name is neither a string nor an Enum member
    - The id is not a string
    """
