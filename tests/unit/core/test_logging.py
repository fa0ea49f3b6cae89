"""Tests for structured logging helpers."""

from __future__ import annotations

import structlog

from botking.core.logging import (
    add_app_context,
    bind_context,
    build_processors,
    clear_context,
)


class TestProcessors:
    """Tests for the processor chain."""

    def test_add_app_context(self) -> None:
        """Test app name is added to every event."""
        event = add_app_context(None, "info", {"event": "hello"})
        assert event["app"] == "botking"

    def test_json_chain_ends_with_json_renderer(self) -> None:
        """Test JSON output uses the JSON renderer."""
        processors = build_processors(json_format=True)
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_chain_ends_with_console_renderer(self) -> None:
        """Test development output uses the console renderer."""
        processors = build_processors()
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


class TestContext:
    """Tests for bound logging context."""

    def test_bind_and_clear(self) -> None:
        """Test context can be bound and cleared."""
        bind_context(request_id="req-42")
        assert structlog.contextvars.get_contextvars()["request_id"] == "req-42"

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
