"""Integration tests for the layout service."""

import pytest

from dynatemplates.core.exceptions import (
    TemplateLanguageError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from dynatemplates.domain.entities import LayoutRenderResult


@pytest.mark.asyncio
async def test_render_by_name(layout_service):
    await layout_service.create_record(
        {"name": "base", "engine": "njk", "language": "html", "content": "<main>{{ content }}</main>"}
    )

    result = await layout_service.render("base", data={"content": "Body"})

    assert isinstance(result, LayoutRenderResult)
    assert result.content == "<main>Body</main>"


@pytest.mark.asyncio
async def test_render_falls_back_to_system_and_default_locale(layout_service):
    await layout_service.create_record({"name": "base", "engine": "njk", "content": "sys {{ content }}"})

    result = await layout_service.render("base", "tenant", "t1", "de", {"content": "x"})

    assert result.content == "sys x"


@pytest.mark.asyncio
async def test_unknown_layout(layout_service):
    with pytest.raises(TemplateNotFoundError, match="Template layout not found: gone in scope system"):
        await layout_service.render("gone")


@pytest.mark.asyncio
async def test_layout_without_content(layout_service):
    await layout_service.create_record({"name": "empty", "engine": "njk", "content": ""})

    with pytest.raises(TemplateValidationError):
        await layout_service.render("empty")


@pytest.mark.asyncio
async def test_language_failure(layout_service):
    await layout_service.create_record(
        {"name": "broken", "engine": "njk", "language": "html", "content": "{{ content }}"}
    )

    with pytest.raises(TemplateLanguageError):
        await layout_service.render("broken", data={"content": "  "})


@pytest.mark.asyncio
async def test_render_content_steps_are_optional(layout_service):
    raw = await layout_service.render_content("{{ content }}")
    expanded = await layout_service.render_content(
        "<p>{{ content }}</p>", engine="njk", data={"content": "x"}
    )
    processed = await layout_service.render_content(
        "<p>{{ content }}</p>", language="html", engine="njk", data={"content": "x"}
    )

    assert raw == "{{ content }}"
    assert expanded == "<p>x</p>"
    assert processed == "<p>x</p>"


@pytest.mark.asyncio
async def test_render_content_requires_content(layout_service):
    with pytest.raises(TemplateValidationError):
        await layout_service.render_content("")
