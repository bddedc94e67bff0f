"""Persistence repositories for database operations."""

from dynatemplates.infrastructure.persistence.repositories.record_repository import (
    RecordRepository,
)
from dynatemplates.infrastructure.persistence.repositories.template_layout_repository import (
    TemplateLayoutRepository,
)
from dynatemplates.infrastructure.persistence.repositories.template_repository import (
    TemplateRepository,
)

__all__ = [
    "RecordRepository",
    "TemplateLayoutRepository",
    "TemplateRepository",
]
