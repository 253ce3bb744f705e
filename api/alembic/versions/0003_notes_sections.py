"""notes and sections

Revision ID: 0003_notes_sections
Revises: 0002_templates_fields
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


revision = "0003_notes_sections"
down_revision = "0002_templates_fields"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("template_id", sa.String(36), sa.ForeignKey("templates.id", ondelete="RESTRICT"), nullable=False, index=True),
        sa.Column("owner_id", sa.String(36), sa.ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="Draft"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("status IN ('Draft', 'Publish')", name="ck_notes_status"),
    )
    op.create_index("ix_notes_status", "notes", ["status"])

    op.create_table(
        "sections",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("note_id", sa.String(36), sa.ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("field_id", sa.String(36), sa.ForeignKey("fields.id", ondelete="RESTRICT"), nullable=False, index=True),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.UniqueConstraint("note_id", "field_id", name="uq_sections_note_field"),
    )


def downgrade() -> None:
    op.drop_table("sections")
    op.drop_index("ix_notes_status", table_name="notes")
    op.drop_table("notes")
