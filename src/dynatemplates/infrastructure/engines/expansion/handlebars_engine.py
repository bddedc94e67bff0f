"""Handlebars expansion engine backed by pybars3.

Custom filters are exposed as Handlebars helpers; global values are merged
beneath the caller's data so the data always wins on a name clash. Block
helpers are checked for matching open and close tags before compiling,
since pybars silently drops an unterminated block.
"""

import re
from functools import cached_property
from typing import Any, Callable

from dynatemplates.domain.entities.template import TemplateEngineKey
from dynatemplates.infrastructure.engines.base import ExpansionEngine

_COMMENT_RE = re.compile(r"\{\{!--.*?--\}\}|\{\{![^}]*\}\}", re.DOTALL)
# {{#name ...}}, {{^name}}, {{#> partial}}, {{#*inline "x"}} and {{/name}}
_BLOCK_TAG_RE = re.compile(r"\{\{~?\s*([#^/])\s*>?\s*\*?([^\s}~]+)")


class HandlebarsBlockError(ValueError):
    """Raised when block helpers are not properly nested."""


def check_blocks(content: str) -> None:
    """Raise HandlebarsBlockError unless every block is closed in order."""
    stack: list[str] = []
    for match in _BLOCK_TAG_RE.finditer(_COMMENT_RE.sub("", content)):
        kind, name = match.groups()
        if kind != "/":
            stack.append(name)
        elif not stack:
            raise HandlebarsBlockError(f"Unexpected closing block {{{{/{name}}}}}")
        elif stack[-1] != name:
            raise HandlebarsBlockError(
                f"Expected {{{{/{stack[-1]}}}}} but found {{{{/{name}}}}}"
            )
        else:
            stack.pop()
    if stack:
        raise HandlebarsBlockError(f"Unclosed block {{{{#{stack[-1]}}}}}")


def _as_helper(filter_func: Callable[..., Any]) -> Callable[..., Any]:
    """Adapt a filter (value, *args) to the helper signature (this, *args)."""

    def helper(this: Any, *args: Any, **kwargs: Any) -> Any:
        return filter_func(*args, **kwargs)

    return helper


class HandlebarsEngine(ExpansionEngine):
    """Handlebars-family expansion engine."""

    engine_name = TemplateEngineKey.HANDLEBARS.value

    @cached_property
    def _compiler(self) -> Any:
        # pybars is only imported once a Handlebars template is rendered
        from pybars import Compiler

        return Compiler()

    @cached_property
    def _helpers(self) -> dict[str, Callable[..., Any]]:
        return {name: _as_helper(func) for name, func in self.custom_options.filters.items()}

    def _compile(self, content: str) -> Any:
        check_blocks(content)
        return self._compiler.compile(content)

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        template = self._compile(content)
        context = {**self.custom_options.global_values, **(data or {})}
        return str(template(context, helpers=self._helpers))

    async def validate(self, content: str) -> bool:
        try:
            self._compile(content)
            return True
        except Exception:
            return False
