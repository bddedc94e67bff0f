"""Abstract base classes for template engines.

Two capability families share the same surface: expansion engines substitute
data into template syntax, language processors validate and normalize a
content dialect. Every provider is keyed by its ``engine_name``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar


@dataclass(frozen=True)
class CustomEngineOptions:
    """Cross-cutting extension points supplied to every expansion engine.

    Attributes:
        filters: Named custom functions made available to templates.
        global_values: Named values (or callables) visible to every template.
    """

    filters: dict[str, Callable[..., Any]] = field(default_factory=dict)
    global_values: dict[str, Any] = field(default_factory=dict)


class ExpansionEngine(ABC):
    """Abstract base class for expansion engines.

    Implementations must keep ``render`` a pure function of the content, the
    data and the configuration fixed at construction time.
    """

    engine_name: ClassVar[str]

    def __init__(
        self,
        options: dict[str, Any] | None = None,
        custom_options: CustomEngineOptions | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            options: Engine-specific configuration.
            custom_options: Filters and global values shared by all engines.
        """
        self.options = dict(options or {})
        self.custom_options = custom_options or CustomEngineOptions()

    @abstractmethod
    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        """Expand template content with data.

        Args:
            content: Template source text.
            data: Variables available to the template.

        Returns:
            Expanded text.

        Raises:
            Exception: If the template cannot be compiled or rendered.
        """
        pass

    @abstractmethod
    async def validate(self, content: str) -> bool:
        """Check whether the template source compiles. Never raises."""
        pass


class LanguageProcessor(ABC):
    """Abstract base class for language processors."""

    engine_name: ClassVar[str]

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        """Initialize the processor.

        Args:
            options: Processor-specific configuration.
        """
        self.options = dict(options or {})

    @abstractmethod
    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        """Process rendered content in this dialect.

        Args:
            content: Already expanded content.
            data: Render data (most processors ignore it).

        Returns:
            Processed content.

        Raises:
            Exception: If the content is invalid for this dialect.
        """
        pass

    @abstractmethod
    async def validate(self, content: str) -> bool:
        """Check whether the content is valid in this dialect. Never raises."""
        pass
