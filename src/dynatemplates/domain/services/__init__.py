"""Domain services for template resolution, overrides and rendering."""

from dynatemplates.domain.services.render_pipeline import RenderPipeline, wrap_render_errors
from dynatemplates.domain.services.scoped_record_service import ScopedRecordService
from dynatemplates.domain.services.template_layout_service import TemplateLayoutService
from dynatemplates.domain.services.template_service import TemplateService

__all__ = [
    "RenderPipeline",
    "ScopedRecordService",
    "TemplateLayoutService",
    "TemplateService",
    "wrap_render_errors",
]
