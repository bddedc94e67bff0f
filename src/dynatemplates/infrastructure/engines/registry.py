"""Engine registry for expansion engines and language processors.

The registry is built once from a configuration snapshot and is read-only
afterwards; concurrent renders share its provider instances.
"""

from typing import Sequence

from dynatemplates.core.config import EngineRegistryConfig
from dynatemplates.core.exceptions import TemplateNotFoundError
from dynatemplates.core.logging import get_logger
from dynatemplates.infrastructure.engines.base import (
    CustomEngineOptions,
    ExpansionEngine,
    LanguageProcessor,
)
from dynatemplates.infrastructure.engines.expansion import (
    HandlebarsEngine,
    JinjaEngine,
    MakoEngine,
    PugEngine,
)
from dynatemplates.infrastructure.engines.language import (
    HtmlProcessor,
    MarkdownProcessor,
    MjmlProcessor,
    TextProcessor,
)

logger = get_logger(__name__)

DEFAULT_TEMPLATE_ENGINES: tuple[type[ExpansionEngine], ...] = (
    JinjaEngine,
    HandlebarsEngine,
    MakoEngine,
    PugEngine,
)
DEFAULT_LANGUAGE_ENGINES: tuple[type[LanguageProcessor], ...] = (
    MjmlProcessor,
    HtmlProcessor,
    TextProcessor,
    MarkdownProcessor,
)


def _engine_name(engine_class: type) -> str:
    engine_name = getattr(engine_class, "engine_name", None)
    if not engine_name:
        raise ValueError(
            f"Engine class {engine_class.__name__} must define an engine_name attribute"
        )
    return engine_name


class EngineRegistry:
    """Registry of providers keyed by their symbolic engine name.

    Only providers whose key is enabled in the configuration are registered.
    Registering a key twice replaces the earlier provider.
    """

    def __init__(
        self,
        config: EngineRegistryConfig,
        template_engines: Sequence[type[ExpansionEngine]] | None = None,
        language_engines: Sequence[type[LanguageProcessor]] | None = None,
    ) -> None:
        """Initialize the registry and instantiate every enabled provider.

        Args:
            config: Configuration snapshot, read once here.
            template_engines: Expansion engine classes to consider.
            language_engines: Language processor classes to consider.
        """
        self.config = config
        self._template_engines: dict[str, ExpansionEngine] = {}
        self._language_engines: dict[str, LanguageProcessor] = {}

        self.register_template_engines(
            DEFAULT_TEMPLATE_ENGINES if template_engines is None else template_engines
        )
        self.register_language_engines(
            DEFAULT_LANGUAGE_ENGINES if language_engines is None else language_engines
        )

    def register_template_engines(self, engine_classes: Sequence[type[ExpansionEngine]]) -> None:
        """Instantiate and register the enabled expansion engines.

        Args:
            engine_classes: Expansion engine classes, in registration order.

        Raises:
            ValueError: If a class does not define engine_name.
        """
        custom_options = CustomEngineOptions(
            filters=dict(self.config.filters),
            global_values=dict(self.config.global_values),
        )
        for engine_class in engine_classes:
            engine_name = _engine_name(engine_class)
            if engine_name not in self.config.template_engines:
                continue
            options = self.config.template_options.get(engine_name)
            self.register_template_engine(engine_name, engine_class(options, custom_options))

    def register_language_engines(
        self, engine_classes: Sequence[type[LanguageProcessor]]
    ) -> None:
        """Instantiate and register the enabled language processors.

        Args:
            engine_classes: Language processor classes, in registration order.

        Raises:
            ValueError: If a class does not define engine_name.
        """
        for engine_class in engine_classes:
            engine_name = _engine_name(engine_class)
            if engine_name not in self.config.language_engines:
                continue
            options = self.config.language_options.get(engine_name)
            self.register_language_engine(engine_name, engine_class(options))

    def register_template_engine(self, engine_name: str, engine: ExpansionEngine) -> None:
        self._template_engines[engine_name] = engine
        logger.debug("Template engine registered", engine=engine_name)

    def register_language_engine(self, engine_name: str, engine: LanguageProcessor) -> None:
        self._language_engines[engine_name] = engine
        logger.debug("Language engine registered", language=engine_name)

    def get_template_engine(self, engine_name: str) -> ExpansionEngine:
        """Get a registered expansion engine.

        Raises:
            TemplateNotFoundError: If the key was never registered.
        """
        engine = self._template_engines.get(engine_name)
        if engine is None:
            raise TemplateNotFoundError(
                f"Template engine not found for format: {engine_name}", engine=engine_name
            )
        return engine

    def get_language_engine(self, engine_name: str) -> LanguageProcessor:
        """Get a registered language processor.

        Raises:
            TemplateNotFoundError: If the key was never registered.
        """
        engine = self._language_engines.get(engine_name)
        if engine is None:
            raise TemplateNotFoundError(
                f"Language engine not found for format: {engine_name}", language=engine_name
            )
        return engine

    def has_template_engine(self, engine_name: str) -> bool:
        return engine_name in self._template_engines

    def has_language_engine(self, engine_name: str) -> bool:
        return engine_name in self._language_engines

    def supported_template_formats(self) -> list[str]:
        return list(self._template_engines)

    def supported_language_formats(self) -> list[str]:
        return list(self._language_engines)
