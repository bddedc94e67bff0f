"""Tests for the Jinja2 (njk) expansion engine."""

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from dynatemplates.infrastructure.engines.base import CustomEngineOptions
from dynatemplates.infrastructure.engines.expansion import JinjaEngine


@pytest.fixture
def engine():
    return JinjaEngine(
        custom_options=CustomEngineOptions(
            filters={"shout": lambda value: str(value).upper()},
            global_values={"app_name": "Acme"},
        )
    )


@pytest.mark.asyncio
async def test_render_simple_variable(engine):
    assert await engine.render("Hello {{ name }}!", {"name": "John"}) == "Hello John!"


@pytest.mark.asyncio
async def test_render_escapes_html(engine):
    result = await engine.render("<p>{{ name }}</p>", {"name": "<script>"})

    assert result == "<p>&lt;script&gt;</p>"


@pytest.mark.asyncio
async def test_undefined_variable_raises(engine):
    with pytest.raises(UndefinedError):
        await engine.render("Hello {{ missing }}!", {})


@pytest.mark.asyncio
async def test_custom_filter_and_global(engine):
    result = await engine.render("{{ name | shout }} @ {{ app_name }}", {"name": "ann"})

    assert result == "ANN @ Acme"


@pytest.mark.asyncio
async def test_sandbox_blocks_unsafe_attribute_access(engine):
    with pytest.raises(Exception):
        await engine.render("{{ ''.__class__.__mro__ }}", {})


@pytest.mark.asyncio
async def test_syntax_error_raises(engine):
    with pytest.raises(TemplateSyntaxError):
        await engine.render("{% if %}", {})


@pytest.mark.asyncio
async def test_validate(engine):
    assert await engine.validate("Hello {{ name }}") is True
    assert await engine.validate("{% for x in %}") is False


@pytest.mark.asyncio
async def test_environment_options_are_applied():
    engine = JinjaEngine(options={"autoescape": False, "trim_blocks": True})

    result = await engine.render("{% if flag %}\n<b>{{ v }}</b>{% endif %}", {"flag": True, "v": "<i>"})

    assert result == "<b><i></b>"


def test_register_filter_after_construction(engine):
    engine.register_filter("twice", lambda value: value * 2)
    engine.register_global("year", 2026)

    assert "twice" in engine.env.filters
    assert engine.env.globals["year"] == 2026
