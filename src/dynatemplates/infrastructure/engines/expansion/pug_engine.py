"""Pug expansion engine backed by pypugjs.

Pug source is translated into Jinja2 source by the pypugjs extension and then
rendered in a sandboxed Jinja2 environment carrying the shared filters and
global values.
"""

from functools import cached_property
from typing import Any

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

from dynatemplates.domain.entities.template import TemplateEngineKey
from dynatemplates.infrastructure.engines.base import ExpansionEngine

# The extension only preprocesses sources whose name carries a pug extension
_PUG_SOURCE_NAME = "template.pug"


class PugEngine(ExpansionEngine):
    """Pug-family expansion engine."""

    engine_name = TemplateEngineKey.PUG.value

    @cached_property
    def env(self) -> SandboxedEnvironment:
        from pypugjs.ext.jinja import PyPugJSExtension

        environment_options = {
            "autoescape": True,
            "undefined": StrictUndefined,
            **self.options,
            "extensions": [PyPugJSExtension, *self.options.get("extensions", ())],
        }
        env = SandboxedEnvironment(**environment_options)
        env.filters.update(self.custom_options.filters)
        env.globals.update(self.custom_options.global_values)
        return env

    def _compile(self, content: str) -> Any:
        source = self.env.preprocess(content, name=_PUG_SOURCE_NAME)
        return self.env.from_string(source)

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        return self._compile(content).render(**(data or {}))

    async def validate(self, content: str) -> bool:
        try:
            self._compile(content)
            return True
        except Exception:
            return False
