"""Tests for the engine registry."""

from typing import Any

import pytest

from dynatemplates.core.config import EngineRegistryConfig
from dynatemplates.core.exceptions import TemplateNotFoundError
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.engines.base import ExpansionEngine, LanguageProcessor
from dynatemplates.infrastructure.engines.expansion import JinjaEngine
from dynatemplates.infrastructure.engines.language import HtmlProcessor


class EchoEngine(ExpansionEngine):
    engine_name = "njk"

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        return f"echo:{content}"

    async def validate(self, content: str) -> bool:
        return True


class NamelessProcessor(LanguageProcessor):
    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        return content

    async def validate(self, content: str) -> bool:
        return True


def test_default_configuration_enables_default_keys():
    registry = EngineRegistry(EngineRegistryConfig())

    assert registry.supported_template_formats() == ["njk"]
    assert sorted(registry.supported_language_formats()) == ["html", "mjml", "txt"]
    assert not registry.has_template_engine("hbs")
    assert not registry.has_language_engine("md")


def test_all_built_in_providers(engine_registry):
    assert sorted(engine_registry.supported_template_formats()) == ["ejs", "hbs", "njk", "pug"]
    assert sorted(engine_registry.supported_language_formats()) == ["html", "md", "mjml", "txt"]
    assert isinstance(engine_registry.get_template_engine("njk"), JinjaEngine)
    assert isinstance(engine_registry.get_language_engine("html"), HtmlProcessor)


def test_unknown_keys_raise_not_found():
    registry = EngineRegistry(EngineRegistryConfig())

    with pytest.raises(TemplateNotFoundError, match="Template engine not found for format: hbs"):
        registry.get_template_engine("hbs")
    with pytest.raises(TemplateNotFoundError, match="Language engine not found for format: pdf"):
        registry.get_language_engine("pdf")


def test_class_without_engine_name_is_rejected():
    with pytest.raises(ValueError, match="must define an engine_name"):
        EngineRegistry(EngineRegistryConfig(), language_engines=[NamelessProcessor])


def test_later_registration_replaces_earlier():
    registry = EngineRegistry(EngineRegistryConfig(), template_engines=[JinjaEngine, EchoEngine])

    assert isinstance(registry.get_template_engine("njk"), EchoEngine)


def test_options_and_custom_options_reach_providers():
    config = EngineRegistryConfig(
        template_options={"njk": {"trim_blocks": True}},
        language_options={"mjml": {"minify": True}},
        filters={"shout": str.upper},
        global_values={"app_name": "Acme"},
    )
    registry = EngineRegistry(config)

    jinja = registry.get_template_engine("njk")
    assert jinja.options == {"trim_blocks": True}
    assert jinja.env.trim_blocks is True
    assert jinja.env.filters["shout"] is str.upper
    assert jinja.env.globals["app_name"] == "Acme"
    assert registry.get_language_engine("mjml").options == {"minify": True}


@pytest.mark.asyncio
async def test_shared_provider_instances_render_independently(engine_registry):
    engine = engine_registry.get_template_engine("njk")

    first = await engine.render("{{ n }}", {"n": 1})
    second = await engine.render("{{ n }}", {"n": 2})

    assert (first, second) == ("1", "2")
