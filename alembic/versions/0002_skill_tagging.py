"""Skill tagging (mandatory / advantage)

Revision ID: 0002_skill_tagging
Revises: 0001_initial_schema
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_skill_tagging"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None

INDEX_NAME = "ix_skills_skill_type"


def _has_table(insp: sa.Inspector, table: str) -> bool:
    return table in insp.get_table_names()


def _has_column(insp: sa.Inspector, table: str, column: str) -> bool:
    if not _has_table(insp, table):
        return False
    cols = {c["name"] for c in insp.get_columns(table)}
    return column in cols


def _has_index(insp: sa.Inspector, table: str, name: str) -> bool:
    if not _has_table(insp, table):
        return False
    return name in {idx["name"] for idx in insp.get_indexes(table)}


def upgrade() -> None:
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if _has_table(insp, "skills") and not _has_column(insp, "skills", "skill_type"):
        with op.batch_alter_table("skills", schema=None) as batch_op:
            batch_op.add_column(
                sa.Column("skill_type", sa.String(length=20), nullable=False, server_default="advantage")
            )

    insp = sa.inspect(bind)
    if _has_table(insp, "skills") and not _has_index(insp, "skills", INDEX_NAME):
        op.create_index(INDEX_NAME, "skills", ["skill_type"], unique=False)


def downgrade() -> None:
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if _has_index(insp, "skills", INDEX_NAME):
        op.drop_index(INDEX_NAME, table_name="skills")

    insp = sa.inspect(bind)
    if _has_column(insp, "skills", "skill_type"):
        with op.batch_alter_table("skills", schema=None) as batch_op:
            batch_op.drop_column("skill_type")
