"""Subscription registry for the event router.

The registry maps an event name to its id buckets and each id bucket to the
``HandlerSet`` subscribed under that (name, id) key. A bucket only exists
while it holds at least one handler. The registry is not synchronized; the
router guards every call with its own lock.
"""

from loguru import logger

from .core import CleanupPolicy, Handler, HandlerSet


class HandlerRegistry:
    """Two-level ``name -> id -> HandlerSet`` mapping."""

    def __init__(self, cleanup_policy: CleanupPolicy = CleanupPolicy.BUCKET):
        self._buckets: dict[str, dict[str, HandlerSet]] = {}
        self._cleanup_policy = CleanupPolicy(cleanup_policy)

    @property
    def cleanup_policy(self) -> CleanupPolicy:
        return self._cleanup_policy

    def add(self, name: str, event_id: str, handler: Handler) -> None:
        """Append a handler to the (name, id) bucket, creating it if needed."""
        ids = self._buckets.setdefault(name, {})
        handlers = ids.get(event_id)
        if handlers is None:
            handlers = ids[event_id] = HandlerSet()
        handlers.add(handler)

    def remove(self, name: str, event_id: str, handler: Handler) -> bool:
        """Remove a handler from the (name, id) bucket.

        Empty buckets are dropped according to the cleanup policy.

        Returns:
            True if the handler was found and removed
        """
        ids = self._buckets.get(name)
        if ids is None:
            return False

        handlers = ids.get(event_id)
        if handlers is None or not handlers.remove(handler):
            return False

        if not handlers:
            if self._cleanup_policy is CleanupPolicy.EVENT:
                dropped = len(ids) - 1
                del self._buckets[name]
                if dropped:
                    logger.debug(f"Dropped {dropped} sibling id bucket(s) of {name!r} with the emptied {event_id!r}")
            else:
                del ids[event_id]
                if not ids:
                    del self._buckets[name]
        return True

    def get(self, name: str, event_id: str) -> HandlerSet | None:
        """Return the handlers of the exact (name, id) bucket, if any."""
        ids = self._buckets.get(name)
        if ids is None:
            return None
        return ids.get(event_id)

    def count(self, name: str, event_id: str) -> int:
        handlers = self.get(name, event_id)
        return len(handlers) if handlers is not None else 0

    def names(self) -> list[str]:
        return list(self._buckets)

    def ids(self, name: str) -> list[str]:
        return list(self._buckets.get(name, {}))

    def clear(self) -> None:
        self._buckets.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
