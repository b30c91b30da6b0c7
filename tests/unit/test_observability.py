"""Unit tests for Logfire initialization."""

import logging

import logfire

from dcm.config import Settings
from dcm.observability import initialize_logfire


def test_logfire_disabled_without_token() -> None:
    assert initialize_logfire(Settings()) is False


def test_logfire_configured_with_token(monkeypatch) -> None:
    calls = {}

    def fake_configure(**kwargs):
        calls.update(kwargs)

    monkeypatch.setattr(logfire, "configure", fake_configure)
    monkeypatch.setattr(logfire, "LogfireLoggingHandler", logging.NullHandler)
    root = logging.getLogger()
    handlers = list(root.handlers)

    try:
        assert initialize_logfire(Settings(logfire_token="test-token")) is True
        assert calls["service_name"] == "dcm"
        assert calls["token"] == "test-token"
    finally:
        root.handlers = handlers


def test_logfire_failure_is_not_fatal(monkeypatch) -> None:
    def broken_configure(**kwargs):
        raise RuntimeError("no network")

    monkeypatch.setattr(logfire, "configure", broken_configure)
    assert initialize_logfire(Settings(logfire_token="test-token")) is False
