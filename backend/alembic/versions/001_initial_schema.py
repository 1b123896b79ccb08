"""Initial schema - candidate registry and system settings.

Revision ID: 001
Revises: None
Create Date: 2026-10-16

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- Sites & Projects ---

    op.create_table(
        "site",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("alias", sa.String(10), unique=True, nullable=False),
        sa.Column("is_study_site", sa.Boolean, server_default="true", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "project",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), unique=True, nullable=False),
        sa.Column("alias", sa.String(4), unique=True, nullable=False),
        sa.Column("recruitment_target", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # --- Candidates ---

    op.create_table(
        "candidate",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("cand_id", sa.Integer, unique=True, nullable=False),
        sa.Column("psc_id", sa.String(255), nullable=False),
        sa.Column("sex", sa.String(10), nullable=True),
        sa.Column("entity_type", sa.String(10), server_default="Human", nullable=False),
        sa.Column("is_active", sa.Boolean, server_default="true", nullable=False),
        sa.Column("registration_site_id", sa.Integer, sa.ForeignKey("site.id"), nullable=False),
        sa.Column("registration_project_id", sa.Integer, sa.ForeignKey("project.id"), nullable=True),
        sa.Column("is_deleted", sa.Boolean, server_default="false", nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_candidate_psc_id", "candidate", ["psc_id"])
    op.create_index("ix_candidate_registration_site", "candidate", ["registration_site_id"])
    op.create_index("ix_candidate_registration_project", "candidate", ["registration_project_id"])

    # --- System Settings ---

    op.create_table(
        "system_setting",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("key", sa.String(200), nullable=False),
        sa.Column("value", sa.Text, nullable=False),
        sa.Column("value_type", sa.String(10), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("category", "key", name="uq_setting_category_key"),
    )
    op.create_index("ix_setting_category", "system_setting", ["category"])


def downgrade() -> None:
    op.drop_table("system_setting")
    op.drop_table("candidate")
    op.drop_table("project")
    op.drop_table("site")
