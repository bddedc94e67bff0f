"""Plain text and Markdown language processors.

Both are identity pass-throughs. Markdown is kept as a placeholder: content
is returned as written and never converted to HTML.
"""

from typing import Any

from dynatemplates.domain.entities.template import TemplateLanguageKey
from dynatemplates.infrastructure.engines.base import LanguageProcessor


class TextProcessor(LanguageProcessor):
    """Plain text processor."""

    engine_name = TemplateLanguageKey.TEXT.value

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        return content

    async def validate(self, content: str) -> bool:
        return True


class MarkdownProcessor(LanguageProcessor):
    """Markdown processor (pass-through)."""

    engine_name = TemplateLanguageKey.MARKDOWN.value

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        return content

    async def validate(self, content: str) -> bool:
        return True
