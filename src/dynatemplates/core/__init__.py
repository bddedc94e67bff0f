"""Core dynatemplates utilities.

This module exports core utilities for use throughout the application.
"""

from dynatemplates.core.config import EngineRegistryConfig, Settings, get_settings
from dynatemplates.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "EngineRegistryConfig",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_correlation_id",
    "clear_context",
]
