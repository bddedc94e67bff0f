"""SQLAlchemy models for the template record store."""

from dynatemplates.infrastructure.persistence.models.template import TemplateModel
from dynatemplates.infrastructure.persistence.models.template_layout import TemplateLayoutModel

__all__ = [
    "TemplateLayoutModel",
    "TemplateModel",
]
