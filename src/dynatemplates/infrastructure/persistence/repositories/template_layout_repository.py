"""Repository for layout template persistence operations."""

from dynatemplates.infrastructure.persistence.models.template_layout import TemplateLayoutModel
from dynatemplates.infrastructure.persistence.repositories.record_repository import (
    RecordRepository,
)


class TemplateLayoutRepository(RecordRepository[TemplateLayoutModel]):
    """Repository for the dynamic_template_layouts table."""

    model = TemplateLayoutModel
