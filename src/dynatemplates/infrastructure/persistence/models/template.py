"""SQLAlchemy model for the dynamic_templates table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dynatemplates.infrastructure.persistence.database import Base
from dynatemplates.infrastructure.persistence.models.scoped_record import (
    ScopedRecordMixin,
    scoped_record_table_args,
)


class TemplateModel(ScopedRecordMixin, Base):
    """Content template: adds a subject and an optional layout reference.

    Attributes:
        subject: Secondary template source (e.g. an email subject line).
        template_layout_name: Name of the layout wrapping the rendered content.
    """

    __tablename__ = "dynamic_templates"

    subject: Mapped[str | None] = mapped_column(String(998), nullable=True)
    template_layout_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = scoped_record_table_args(__tablename__)

    def __repr__(self) -> str:
        return (
            f"<Template(id={self.id}, name={self.name}, scope={self.scope}, "
            f"scope_id={self.scope_id}, locale={self.locale})>"
        )
