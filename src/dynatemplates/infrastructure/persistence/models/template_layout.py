"""SQLAlchemy model for the dynamic_template_layouts table."""

from dynatemplates.infrastructure.persistence.database import Base
from dynatemplates.infrastructure.persistence.models.scoped_record import (
    ScopedRecordMixin,
    scoped_record_table_args,
)


class TemplateLayoutModel(ScopedRecordMixin, Base):
    """Layout template: wraps rendered content through ``{{ content }}``."""

    __tablename__ = "dynamic_template_layouts"

    __table_args__ = scoped_record_table_args(__tablename__)

    def __repr__(self) -> str:
        return (
            f"<TemplateLayout(id={self.id}, name={self.name}, scope={self.scope}, "
            f"scope_id={self.scope_id}, locale={self.locale})>"
        )
