"""create_dynamic_template_tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f7b9d2"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES = ("dynamic_templates", "dynamic_template_layouts")


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=36), nullable=False, comment="Record ID (UUID)"),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Record name"),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "type",
            sa.String(length=20),
            nullable=True,
            comment="Delivery channel (email, sms, push, pdf)",
        ),
        sa.Column(
            "engine",
            sa.String(length=20),
            nullable=False,
            server_default="njk",
            comment="Expansion engine key",
        ),
        sa.Column(
            "language",
            sa.String(length=20),
            nullable=True,
            comment="Language processor key",
        ),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "scope",
            sa.String(length=100),
            nullable=False,
            server_default="system",
            comment="'system' or a tenant scope",
        ),
        sa.Column(
            "scope_id",
            sa.String(length=255),
            nullable=True,
            comment="Tenant discriminator, NULL for system records",
        ),
        sa.Column("locale", sa.String(length=10), nullable=False, server_default="en"),
        sa.Column("preview_context", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def _create_record_table(table_name: str, *extra_columns: sa.Column) -> None:
    op.create_table(
        table_name,
        *_record_columns(),
        *extra_columns,
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "name",
            "scope",
            "scope_id",
            "locale",
            name=f"uq_{table_name}_name_scope_locale",
        ),
    )
    # NULL scope ids never collide in the unique constraint above
    op.create_index(
        f"uq_{table_name}_name_scope_locale_null_scope_id",
        table_name,
        ["name", "scope", "locale"],
        unique=True,
        sqlite_where=sa.text("scope_id IS NULL"),
        postgresql_where=sa.text("scope_id IS NULL"),
    )
    op.create_index(f"ix_{table_name}_scope_scope_id", table_name, ["scope", "scope_id"])


def upgrade() -> None:
    """Upgrade schema."""
    _create_record_table(
        "dynamic_templates",
        sa.Column(
            "subject",
            sa.String(length=998),
            nullable=True,
            comment="Subject source, expanded with the template engine",
        ),
        sa.Column(
            "template_layout_name",
            sa.String(length=255),
            nullable=True,
            comment="Name of the wrapping layout",
        ),
    )
    _create_record_table("dynamic_template_layouts")


def downgrade() -> None:
    """Downgrade schema."""
    for table_name in reversed(TABLES):
        op.drop_index(f"ix_{table_name}_scope_scope_id", table_name=table_name)
        op.drop_index(f"uq_{table_name}_name_scope_locale_null_scope_id", table_name=table_name)
        op.drop_table(table_name)
