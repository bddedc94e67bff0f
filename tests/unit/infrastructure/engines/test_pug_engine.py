"""Tests for the Pug expansion engine."""

import pytest

from dynatemplates.infrastructure.engines.base import CustomEngineOptions
from dynatemplates.infrastructure.engines.expansion import PugEngine


@pytest.fixture
def engine():
    return PugEngine(
        custom_options=CustomEngineOptions(
            filters={"shout": lambda value: str(value).upper()},
            global_values={"app_name": "Acme"},
        )
    )


@pytest.mark.asyncio
async def test_render_tag_with_interpolation(engine):
    result = await engine.render("p Hello #{name}", {"name": "John"})

    assert result.strip() == "<p>Hello John</p>"


@pytest.mark.asyncio
async def test_render_uses_globals(engine):
    result = await engine.render("span= app_name", {})

    assert result.strip() == "<span>Acme</span>"


@pytest.mark.asyncio
async def test_undefined_variable_raises(engine):
    with pytest.raises(Exception):
        await engine.render("p Hello #{missing}", {})


@pytest.mark.asyncio
async def test_validate(engine):
    assert await engine.validate("div\n  p Hello") is True


@pytest.mark.asyncio
async def test_environment_options_override_defaults():
    engine = PugEngine(options={"autoescape": False})

    result = await engine.render("p= name", {"name": "<b>John</b>"})

    assert result.strip() == "<p><b>John</b></p>"
