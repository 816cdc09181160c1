"""Initial schema — jobs, responsibilities, job_responsibilities.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Jobs
    op.create_table(
        "jobs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    # Responsibilities registry
    op.create_table(
        "responsibilities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    # Job responsibilities
    op.create_table(
        "job_responsibilities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "job_id",
            sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "responsibility_id",
            sa.String(36),
            sa.ForeignKey("responsibilities.id"),
            nullable=False,
        ),
        sa.Column("weighting", sa.Integer, nullable=False, server_default="10"),
        sa.Column(
            "start_date", sa.Date, nullable=False, server_default=sa.func.current_date()
        ),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "weighting BETWEEN 1 AND 100", name="ck_job_responsibilities_weighting"
        ),
        sa.CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_job_responsibilities_dates",
        ),
    )
    op.create_index("idx_job_responsibilities_job", "job_responsibilities", ["job_id"])
    op.create_index(
        "idx_job_responsibilities_responsibility",
        "job_responsibilities",
        ["responsibility_id"],
    )


def downgrade() -> None:
    op.drop_table("job_responsibilities")
    op.drop_table("responsibilities")
    op.drop_table("jobs")
