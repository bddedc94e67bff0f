"""Columns shared by every scoped template record.

A record is identified by (name, scope, scope_id, locale). System records use
the reserved scope "system" with a NULL scope_id.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, String, Text, UniqueConstraint, func, text
from sqlalchemy.orm import Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def scoped_record_table_args(table_name: str) -> tuple:
    """Build the uniqueness constraints for a scoped record table.

    NULL scope ids never collide in a plain unique constraint, so a partial
    unique index covers the system records.
    """
    return (
        UniqueConstraint(
            "name",
            "scope",
            "scope_id",
            "locale",
            name=f"uq_{table_name}_name_scope_locale",
        ),
        Index(
            f"uq_{table_name}_name_scope_locale_null_scope_id",
            "name",
            "scope",
            "locale",
            unique=True,
            sqlite_where=text("scope_id IS NULL"),
            postgresql_where=text("scope_id IS NULL"),
        ),
        Index(f"ix_{table_name}_scope_scope_id", "scope", "scope_id"),
    )


class ScopedRecordMixin:
    """Mixin with the columns common to templates and layouts.

    Attributes:
        id: Primary key (UUID string).
        name: Record name (lowercase letters, digits, dashes, underscores).
        display_name: Optional human-readable name.
        description: Optional description.
        type: Optional delivery channel (email, sms, push, pdf).
        engine: Expansion engine key.
        language: Optional language processor key.
        content: Raw template source.
        scope: "system" or a tenant scope name.
        scope_id: Tenant discriminator, NULL for system records.
        locale: Locale code.
        preview_context: Sample data for previews.
        is_active: Whether the record is active.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp when the record was last updated.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    engine: Mapped[str] = mapped_column(String(20), nullable=False, default="njk")
    language: Mapped[str | None] = mapped_column(String(20), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    scope: Mapped[str] = mapped_column(String(100), nullable=False, default="system")
    scope_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    locale: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    preview_context: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
    )

    @property
    def is_system(self) -> bool:
        """Whether this is a system (tenant-independent) record."""
        return self.scope == "system"
