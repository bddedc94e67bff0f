"""Jinja2 expansion engine (Nunjucks-family syntax).

Uses a sandboxed environment so stored templates cannot execute arbitrary
code. Undefined variables raise instead of rendering as empty strings.
"""

from typing import Any, Callable

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

from dynatemplates.core.logging import get_logger
from dynatemplates.domain.entities.template import TemplateEngineKey
from dynatemplates.infrastructure.engines.base import CustomEngineOptions, ExpansionEngine

logger = get_logger(__name__)


class JinjaEngine(ExpansionEngine):
    """Nunjucks-compatible expansion engine backed by Jinja2."""

    engine_name = TemplateEngineKey.NUNJUCKS.value

    def __init__(
        self,
        options: dict[str, Any] | None = None,
        custom_options: CustomEngineOptions | None = None,
    ) -> None:
        super().__init__(options, custom_options)
        environment_options = {
            "autoescape": True,
            "undefined": StrictUndefined,
            **{key: value for key, value in self.options.items() if key != "filters"},
        }
        self.env = SandboxedEnvironment(**environment_options)

        for name, filter_func in self.custom_options.filters.items():
            self.register_filter(name, filter_func)
        for name, value in self.custom_options.global_values.items():
            self.register_global(name, value)

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        template = self.env.from_string(content)
        return template.render(**(data or {}))

    async def validate(self, content: str) -> bool:
        try:
            self.env.from_string(content)
            return True
        except Exception as e:
            logger.debug("Jinja template validation failed", error=str(e))
            return False

    def register_filter(self, name: str, filter_func: Callable[..., Any]) -> None:
        """Register a custom filter in the environment."""
        self.env.filters[name] = filter_func

    def register_global(self, name: str, value: Any) -> None:
        """Register a global value in the environment."""
        self.env.globals[name] = value
