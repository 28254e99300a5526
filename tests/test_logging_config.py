"""Tests for structured logging helpers."""

import json
import logging

from mealprint.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    blueprint_id_ctx,
    clear_context,
    request_id_ctx,
    set_context,
)


def _record(message: str = "rendered") -> logging.LogRecord:
    return logging.LogRecord(
        name="mealprint.plan.blueprint",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestLoggingContext:
    """Tests for context variable handling."""

    def test_context_manager_sets_and_resets(self):
        """Test that values are restored on exit."""
        with LoggingContext(request_id="req-1", blueprint_id="bp-1"):
            assert request_id_ctx.get() == "req-1"
            assert blueprint_id_ctx.get() == "bp-1"
        assert request_id_ctx.get() is None
        assert blueprint_id_ctx.get() is None

    def test_nested_contexts(self):
        """Test that an inner context only overrides what it sets."""
        with LoggingContext(request_id="outer"):
            with LoggingContext(blueprint_id="bp-2"):
                assert request_id_ctx.get() == "outer"
                assert blueprint_id_ctx.get() == "bp-2"
            assert blueprint_id_ctx.get() is None
            assert request_id_ctx.get() == "outer"

    def test_set_and_clear(self):
        """Test the imperative helpers."""
        set_context(request_id="req-3")
        assert request_id_ctx.get() == "req-3"
        clear_context()
        assert request_id_ctx.get() is None


class TestFormatters:
    """Tests for log formatters."""

    def test_json_formatter_includes_context(self):
        """Test that JSON output carries context fields."""
        with LoggingContext(blueprint_id="bp-9"):
            output = StructuredJsonFormatter().format(_record())

        data = json.loads(output)
        assert data["message"] == "rendered"
        assert data["level"] == "INFO"
        assert data["blueprint_id"] == "bp-9"
        assert "request_id" not in data

    def test_contextual_formatter(self):
        """Test the human-readable format."""
        with LoggingContext(request_id="0123456789abcdef", blueprint_id="bp-9"):
            output = ContextualFormatter().format(_record())

        assert "mealprint.plan.blueprint [req=01234567, blueprint=bp-9] | rendered" in output
