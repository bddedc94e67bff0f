"""Repository for content template persistence operations."""

from dynatemplates.infrastructure.persistence.models.template import TemplateModel
from dynatemplates.infrastructure.persistence.repositories.record_repository import (
    RecordRepository,
)


class TemplateRepository(RecordRepository[TemplateModel]):
    """Repository for the dynamic_templates table."""

    model = TemplateModel
