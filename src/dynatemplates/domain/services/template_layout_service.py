"""Layout template service.

A layout wraps already-rendered content, exposed to the layout source as the
``content`` variable, and goes through the same expansion and language steps
as a content template. Layouts are never wrapped themselves.
"""

from typing import Any

from dynatemplates.core.exceptions import TemplateNotFoundError, TemplateValidationError
from dynatemplates.core.logging import LoggingContext, get_logger
from dynatemplates.domain.entities.template import SYSTEM_SCOPE, LayoutRenderResult
from dynatemplates.domain.services.render_pipeline import wrap_render_errors
from dynatemplates.domain.services.scoped_record_service import ScopedRecordService
from dynatemplates.infrastructure.persistence.models import TemplateLayoutModel
from dynatemplates.infrastructure.persistence.repositories import TemplateLayoutRepository

logger = get_logger(__name__)


class TemplateLayoutService(ScopedRecordService[TemplateLayoutModel]):
    """Service for layout templates."""

    repository_class = TemplateLayoutRepository
    record_label = "Template layout"

    async def render(
        self,
        name: str,
        scope: str | None = None,
        scope_id: str | None = None,
        locale: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> LayoutRenderResult:
        """Render a stored layout by name.

        Args:
            name: Layout name.
            scope: Requested scope (defaults to "system").
            scope_id: Tenant discriminator.
            locale: Requested locale.
            data: Variables, usually including the wrapped ``content``.

        Returns:
            LayoutRenderResult with the rendered content.

        Raises:
            TemplateNotFoundError: If no layout resolves.
            TemplateValidationError: If the layout has no content.
            TemplateEngineError: If expansion fails.
            TemplateLanguageError: If language processing fails.
            TemplateRenderError: For any other failure.
        """
        scope = scope or SYSTEM_SCOPE
        data = data or {}

        with LoggingContext(operation="layout_render", layout_name=name), wrap_render_errors(
            "template layout rendering", name
        ):
            layout = await self.resolve_record(name, scope, scope_id, locale)
            if layout is None:
                raise TemplateNotFoundError(
                    f"Template layout not found: {name} in scope {scope}",
                    name=name,
                    scope=scope,
                )
            if not layout.content:
                raise TemplateValidationError(
                    f"Template layout '{name}' has no content to render", name=name
                )

            content = layout.content
            if layout.engine:
                content = await self.render_engine(layout.engine, content, data)
            if layout.language:
                content = await self.render_language(layout.language, content, data)

            logger.debug("Template layout rendered", layout_id=layout.id)
            return LayoutRenderResult(content=content)

    async def render_content(
        self,
        content: str,
        language: str | None = None,
        engine: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> str:
        """Render raw layout source without a stored record lookup.

        Expansion runs only when an engine is given; language processing only
        when a language is given.

        Args:
            content: Layout source.
            language: Optional language processor key.
            engine: Optional expansion engine key.
            data: Variables, usually including the wrapped ``content``.

        Returns:
            Rendered content.
        """
        data = data or {}

        with LoggingContext(operation="layout_content_render"), wrap_render_errors(
            "template layout content rendering"
        ):
            if not content:
                raise TemplateValidationError("Content is required for template layout rendering")

            rendered = content
            if engine:
                rendered = await self.render_engine(engine, rendered, data)
            if language:
                rendered = await self.render_language(language, rendered, data)
            return rendered
