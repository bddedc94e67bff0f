"""Content template service.

Renders stored templates by name with scope and locale fallback, optionally
wrapping the result in a layout, and renders raw content supplied by the
caller.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dynatemplates.core.exceptions import (
    TemplateContentError,
    TemplateLayoutError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from dynatemplates.core.logging import LoggingContext, get_logger
from dynatemplates.domain.entities.template import DEFAULT_ENGINE, SYSTEM_SCOPE, RenderResult
from dynatemplates.domain.services.render_pipeline import wrap_render_errors
from dynatemplates.domain.services.scoped_record_service import ScopedRecordService
from dynatemplates.domain.services.template_layout_service import TemplateLayoutService
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.persistence.models import TemplateModel
from dynatemplates.infrastructure.persistence.repositories import TemplateRepository

logger = get_logger(__name__)


class TemplateService(ScopedRecordService[TemplateModel]):
    """Service for content templates."""

    repository_class = TemplateRepository
    record_label = "Template"

    def __init__(
        self,
        session: AsyncSession,
        engine_registry: EngineRegistry,
        layout_service: TemplateLayoutService | None = None,
    ) -> None:
        """Initialize the template service.

        Args:
            session: SQLAlchemy async session.
            engine_registry: Registry of enabled providers.
            layout_service: Layout service; one sharing the session is built if omitted.
        """
        super().__init__(session, engine_registry)
        self.layout_service = layout_service or TemplateLayoutService(session, engine_registry)

    async def render(
        self,
        name: str,
        scope: str | None = None,
        scope_id: str | None = None,
        locale: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> RenderResult:
        """Render a stored template by name.

        The subject and content are expanded with the template's engine. When
        the template names a layout, the expanded content is rendered inside
        it and the layout's own language processing applies; otherwise the
        template's language processor runs on the expanded content.

        Args:
            name: Template name.
            scope: Requested scope (defaults to "system").
            scope_id: Tenant discriminator.
            locale: Requested locale.
            data: Template variables.

        Returns:
            RenderResult with content and subject (empty when none).

        Raises:
            TemplateValidationError: If the name is missing.
            TemplateNotFoundError: If no template resolves.
            TemplateEngineError: If expansion fails.
            TemplateLayoutError: If the layout fails to resolve or render.
            TemplateLanguageError: If language processing fails.
            TemplateRenderError: For any other failure.
        """
        scope = scope or SYSTEM_SCOPE
        data = data or {}

        with LoggingContext(operation="template_render", template_name=name), wrap_render_errors(
            "template rendering", name
        ):
            if not name:
                raise TemplateValidationError("Template name is required")

            template = await self.resolve_record(name, scope, scope_id, locale)
            if template is None:
                raise TemplateNotFoundError(
                    f"Template not found: {name} in scope {scope}",
                    name=name,
                    scope=scope,
                )

            subject = template.subject or ""
            if template.subject and template.engine:
                subject = await self.render_engine(template.engine, template.subject, data)

            content = template.content
            if template.engine:
                content = await self.render_engine(template.engine, content, data)

            if template.template_layout_name:
                content = await self._render_layout(
                    template.template_layout_name, scope, scope_id, locale, data, content
                )
            elif template.language:
                content = await self.render_language(template.language, content, data)

            logger.debug("Template rendered", template_id=template.id, scope=template.scope)
            return RenderResult(content=content, subject=subject)

    async def _render_layout(
        self,
        layout_name: str,
        scope: str,
        scope_id: str | None,
        locale: str | None,
        data: dict[str, Any],
        content: str,
    ) -> str:
        try:
            result = await self.layout_service.render(
                layout_name, scope, scope_id, locale, {**data, "content": content}
            )
        except Exception as e:
            raise TemplateLayoutError(layout_name, e) from e
        return result.content

    async def render_content(
        self,
        content: str,
        language: str | None = None,
        engine: str | None = None,
        data: dict[str, Any] | None = None,
        layout_id: str | None = None,
    ) -> str:
        """Render raw content supplied by the caller.

        The content is expanded first. With a layout id, the layout's stored
        source is rendered around it using the layout's own engine and
        language, and ``language`` is ignored. Without one, ``language`` is
        applied to the expanded content.

        Args:
            content: Template source.
            language: Optional language processor key.
            engine: Expansion engine key (defaults to "njk").
            data: Template variables.
            layout_id: Optional ID of a stored layout to wrap the content.

        Returns:
            Rendered content.

        Raises:
            TemplateValidationError: If content is missing.
            TemplateNotFoundError: If the layout id does not exist.
            TemplateContentError: If the layout cannot be loaded.
            TemplateLayoutError: If the layout fails to render.
        """
        engine = engine or DEFAULT_ENGINE
        data = data or {}

        with LoggingContext(operation="content_render", layout_id=layout_id), wrap_render_errors(
            "content rendering"
        ):
            if not content:
                raise TemplateValidationError("Content is required for rendering")

            rendered = await self.render_engine(engine, content, data)

            if layout_id:
                try:
                    layout = await self.layout_service.get_by_id(layout_id)
                except SQLAlchemyError as e:
                    raise TemplateContentError("template layout retrieval", e) from e
                if layout is None:
                    raise TemplateNotFoundError(
                        f"Template layout not found with ID: {layout_id}", id=layout_id
                    )

                try:
                    rendered = await self.layout_service.render_content(
                        layout.content,
                        language=layout.language,
                        engine=layout.engine,
                        data={**data, "content": rendered},
                    )
                except Exception as e:
                    raise TemplateLayoutError(layout.name, e) from e
            elif language:
                rendered = await self.render_language(language, rendered, data)

            return rendered
