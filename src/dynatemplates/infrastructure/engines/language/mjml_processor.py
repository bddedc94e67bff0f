"""MJML language processor backed by mjml-python.

Compiles MJML component markup to responsive email HTML. The compiler raises
on the first invalid construct; that failure is reported as a compilation
error carrying the compiler's messages.
"""

from functools import cached_property
from typing import Any, Callable

from dynatemplates.core.logging import get_logger
from dynatemplates.domain.entities.template import TemplateLanguageKey
from dynatemplates.infrastructure.engines.base import LanguageProcessor

logger = get_logger(__name__)


class MjmlCompilationError(ValueError):
    """Raised when the MJML compiler rejects the markup."""

    def __init__(self, errors: list[Any]) -> None:
        self.errors = errors
        super().__init__(f"MJML validation errors: {', '.join(str(e) for e in errors)}")


class MjmlProcessor(LanguageProcessor):
    """MJML processor."""

    engine_name = TemplateLanguageKey.MJML.value

    @cached_property
    def _compile_fn(self) -> Callable[..., str]:
        from mjml import mjml2html

        return mjml2html

    def _compile(self, content: str) -> str:
        try:
            return self._compile_fn(content, **self.options)
        except Exception as e:
            logger.warning("MJML compilation failed", error=str(e))
            raise MjmlCompilationError([str(e)]) from e

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        return self._compile(content)

    async def validate(self, content: str) -> bool:
        try:
            self._compile(content)
            return True
        except MjmlCompilationError:
            return False
