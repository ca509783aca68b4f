"""Event name derivation.

Publishers and subscribers may name events with members of their own
``Enum`` classes instead of plain strings. The router resolves such members
to a stable string key before the registry ever sees them, so two members
with equal values in different enums never collide.
"""

from enum import Enum


def event_key(value: Enum) -> str:
    """Return the string key for an enum member.

    The key is the enum class's qualified name and the member name joined
    with a dot, e.g. ``SenderEvent.Test``.
    """
    return f"{type(value).__qualname__}.{value.name}"


def resolve_event_name(name: str | Enum) -> str:
    """Turn an event name given by the caller into its registry key."""
    # StrEnum members are str instances; they still get the qualified key
    if isinstance(name, Enum):
        return event_key(name)
    return name
