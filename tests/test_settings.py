"""Tests for event_router.settings.Settings behavior."""

import pytest
from pydantic import ValidationError

from event_router.router.core import CleanupPolicy
from event_router.settings import Settings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    """Defaults should be stable even if external env or .env sets values.

    We explicitly delete the variables and bypass .env loading by passing
    `_env_file=None`.
    """
    for var in [
        "EVENT_ROUTER_LOG_LEVEL",
        "EVENT_ROUTER_CLEANUP_POLICY",
        "EVENT_ROUTER_ISOLATE_ERRORS",
    ]:
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)  # ignore project .env file if present
    assert s.log_level == "INFO"
    assert s.cleanup_policy is CleanupPolicy.BUCKET
    assert s.isolate_errors is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("EVENT_ROUTER_LOG_LEVEL", "debug")
    monkeypatch.setenv("EVENT_ROUTER_CLEANUP_POLICY", "Event")
    monkeypatch.setenv("EVENT_ROUTER_ISOLATE_ERRORS", "true")
    s = Settings(_env_file=None)
    assert s.log_level == "DEBUG"
    assert s.cleanup_policy is CleanupPolicy.EVENT
    assert s.isolate_errors is True


def test_case_insensitive_env_name(monkeypatch: pytest.MonkeyPatch):
    # lower-case variable name should still be picked up due to case_sensitive=False
    monkeypatch.setenv("event_router_isolate_errors", "1")
    s = Settings(_env_file=None)
    assert s.isolate_errors is True


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose", _env_file=None)


def test_invalid_cleanup_policy():
    with pytest.raises(ValidationError):
        Settings(cleanup_policy="never", _env_file=None)


def test_get_settings_singleton():
    a = get_settings()
    b = get_settings()
    assert a is b


def test_get_settings_cache_not_affected_by_new_env(monkeypatch: pytest.MonkeyPatch):
    first = get_settings()
    original_policy = first.cleanup_policy
    monkeypatch.setenv("EVENT_ROUTER_CLEANUP_POLICY", "event" if original_policy is CleanupPolicy.BUCKET else "bucket")
    second = get_settings()
    assert second is first
    assert second.cleanup_policy is original_policy  # cache not invalidated
