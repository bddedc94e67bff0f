"""Pluggable expansion engines and language processors."""

from dynatemplates.infrastructure.engines.base import (
    CustomEngineOptions,
    ExpansionEngine,
    LanguageProcessor,
)
from dynatemplates.infrastructure.engines.registry import EngineRegistry

__all__ = [
    "CustomEngineOptions",
    "EngineRegistry",
    "ExpansionEngine",
    "LanguageProcessor",
]
