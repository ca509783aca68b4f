"""Tests for event name derivation."""

from enum import Enum, IntEnum, StrEnum

from event_router.keys import event_key, resolve_event_name


class DoorEvent(Enum):
    OPENED = "opened"
    CLOSED = 2


class Outer:
    class Nested(IntEnum):
        PING = 1


class LabelEvent(StrEnum):
    SAVED = "saved"


def test_event_key_uses_class_and_member_name():
    assert event_key(DoorEvent.OPENED) == "DoorEvent.OPENED"
    assert event_key(DoorEvent.CLOSED) == "DoorEvent.CLOSED"


def test_event_key_nested_enum():
    assert event_key(Outer.Nested.PING) == "Outer.Nested.PING"


def test_resolve_event_name():
    assert resolve_event_name("Test") == "Test"
    assert resolve_event_name("") == ""
    assert resolve_event_name(DoorEvent.OPENED) == "DoorEvent.OPENED"
    assert resolve_event_name(LabelEvent.SAVED) == "LabelEvent.SAVED"
