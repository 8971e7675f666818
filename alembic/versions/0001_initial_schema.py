"""Initial schema: form drafts and reference tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _named_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        *_timestamps(),
    )


def upgrade() -> None:
    op.create_table(
        "form_state",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("session_id", sa.String(length=100), nullable=False),
        sa.Column("form_data_xml", sa.Text(), nullable=False),
        sa.Column("current_step", sa.Integer(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_form_state_session_id", "form_state", ["session_id"], unique=True)

    _named_table("categories")
    _named_table("locations")
    _named_table("skills_categories")

    op.create_table(
        "roles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "category_id",
            sa.String(length=36),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_roles_category_id", "roles", ["category_id"])

    # skill_type arrives in 0002
    op.create_table(
        "skills",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "skills_category_id",
            sa.String(length=36),
            sa.ForeignKey("skills_categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_skills_skills_category_id", "skills", ["skills_category_id"])


def downgrade() -> None:
    op.drop_index("ix_skills_skills_category_id", table_name="skills")
    op.drop_table("skills")
    op.drop_index("ix_roles_category_id", table_name="roles")
    op.drop_table("roles")
    op.drop_table("skills_categories")
    op.drop_table("locations")
    op.drop_table("categories")
    op.drop_index("ix_form_state_session_id", table_name="form_state")
    op.drop_table("form_state")
