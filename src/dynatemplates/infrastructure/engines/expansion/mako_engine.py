"""Embedded-code expansion engine backed by Mako.

Registered under the ``ejs`` key: templates embed expressions with ``${...}``
and control flow with ``% for`` / ``<% %>`` blocks. Filters and global values
are placed in the template namespace, so ``${price | currency}`` works.
"""

from functools import cached_property
from typing import Any

from dynatemplates.domain.entities.template import TemplateEngineKey
from dynatemplates.infrastructure.engines.base import ExpansionEngine


class MakoEngine(ExpansionEngine):
    """Embedded-code expansion engine."""

    engine_name = TemplateEngineKey.EJS.value

    @cached_property
    def _template_class(self) -> type:
        from mako.template import Template

        return Template

    def _compile(self, content: str) -> Any:
        options = {"strict_undefined": True, **self.options}
        return self._template_class(text=content, **options)

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        template = self._compile(content)
        namespace = {
            **self.custom_options.filters,
            **self.custom_options.global_values,
            **(data or {}),
        }
        return template.render(**namespace)

    async def validate(self, content: str) -> bool:
        try:
            self._compile(content)
            return True
        except Exception:
            return False
