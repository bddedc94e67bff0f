"""Tests for the structured logging context helpers."""

import structlog

from dynatemplates.core.logging import LoggingContext, bind_correlation_id, clear_context


def test_logging_context_binds_and_restores():
    clear_context()
    bind_correlation_id("cid_outer")

    with LoggingContext(operation="template_render", template_name="welcome", scope_id=None):
        bound = structlog.contextvars.get_contextvars()
        assert bound["operation"] == "template_render"
        assert bound["template_name"] == "welcome"
        assert "scope_id" not in bound

    after = structlog.contextvars.get_contextvars()
    assert after == {"correlation_id": "cid_outer"}
    clear_context()


def test_nested_logging_contexts_restore_outer_values():
    clear_context()

    with LoggingContext(operation="template_render"):
        with LoggingContext(operation="layout_render", layout_name="base"):
            assert structlog.contextvars.get_contextvars()["operation"] == "layout_render"
        bound = structlog.contextvars.get_contextvars()
        assert bound["operation"] == "template_render"
        assert "layout_name" not in bound

    assert structlog.contextvars.get_contextvars() == {}
