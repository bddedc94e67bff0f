"""Two-stage render steps shared by the template and layout services.

Content is first expanded by an expansion engine (variable substitution) and
then optionally processed by a language processor. Provider failures are
wrapped with the failing key; anything unrecognized escaping a render entry
point is wrapped exactly once.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from dynatemplates.core.exceptions import (
    TemplateEngineError,
    TemplateLanguageError,
    TemplateRenderError,
    TemplateValidationError,
    is_known_template_error,
)
from dynatemplates.core.logging import get_logger
from dynatemplates.infrastructure.engines import EngineRegistry

logger = get_logger(__name__)


@contextmanager
def wrap_render_errors(operation: str, template_name: str | None = None) -> Iterator[None]:
    """Re-raise known template errors unchanged and wrap anything else once.

    Args:
        operation: Name of the render operation, used in the wrapped message.
        template_name: Optional name of the template being rendered.

    Raises:
        TemplateRenderError: If an unrecognized exception escapes the block.
    """
    try:
        yield
    except Exception as e:
        if is_known_template_error(e):
            raise
        logger.error(
            "Unexpected render failure",
            operation=operation,
            template_name=template_name,
            error=str(e),
        )
        raise TemplateRenderError(operation, e, template_name=template_name) from e


class RenderPipeline:
    """Runs content through registered expansion engines and language processors."""

    def __init__(self, engine_registry: EngineRegistry) -> None:
        """Initialize the pipeline.

        Args:
            engine_registry: Registry of enabled providers.
        """
        self.engine_registry = engine_registry

    async def render_engine(
        self,
        engine: str,
        content: str,
        data: dict[str, Any] | None = None,
    ) -> str:
        """Expand content with an expansion engine.

        Args:
            engine: Expansion engine key.
            content: Template source.
            data: Variables available to the template.

        Returns:
            Expanded content.

        Raises:
            TemplateValidationError: If content is empty or the engine is not registered.
            TemplateEngineError: If the engine fails.
        """
        if not content:
            raise TemplateValidationError("Content is required for engine rendering")
        if not self.engine_registry.has_template_engine(engine):
            raise TemplateValidationError(f"Template engine not found for: {engine}", engine=engine)

        provider = self.engine_registry.get_template_engine(engine)
        try:
            return await provider.render(content, data or {})
        except Exception as e:
            logger.error("Template engine failed", engine=engine, error=str(e))
            raise TemplateEngineError(engine, e) from e

    async def render_language(
        self,
        language: str,
        content: str,
        data: dict[str, Any] | None = None,
    ) -> str:
        """Process content with a language processor.

        Args:
            language: Language processor key.
            content: Expanded content.
            data: Variables passed through to the processor.

        Returns:
            Processed content.

        Raises:
            TemplateValidationError: If content is empty or the language is not registered.
            TemplateLanguageError: If the processor fails.
        """
        if not content:
            raise TemplateValidationError("Content is required for language rendering")
        if not self.engine_registry.has_language_engine(language):
            raise TemplateValidationError(
                f"Language engine not found for: {language}", language=language
            )

        provider = self.engine_registry.get_language_engine(language)
        try:
            return await provider.render(content, data or {})
        except Exception as e:
            logger.error("Language processor failed", language=language, error=str(e))
            raise TemplateLanguageError(language, e) from e
