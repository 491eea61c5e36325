"""initial schema: responses, shares, snapshots, collaborator feedback

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_responses",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("competency_id", sa.Integer(), nullable=False),
        sa.Column("assessment_level", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("client_seq", sa.BigInteger(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "role_id", "competency_id", name="uq_user_responses_user_role_competency"),
    )
    op.create_index("ix_user_responses_user_role", "user_responses", ["user_id", "role_id"])

    op.create_table(
        "shares",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("original_user_id", sa.Text(), nullable=False),
        sa.Column("original_user_email", sa.Text(), nullable=False),
        sa.Column("collaborator_email", sa.Text(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("shared_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("feedback_submitted", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("feedback_submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("share_token", sa.Text(), nullable=False, unique=True),
    )
    op.create_index("ix_shares_original_user_id", "shares", ["original_user_id"])
    op.create_index("ix_shares_collaborator_email", "shares", ["collaborator_email"])
    op.create_index(
        "ix_shares_owner_collaborator_role", "shares", ["original_user_id", "collaborator_email", "role_id"]
    )

    op.create_table(
        "share_snapshots",
        sa.Column("share_id", sa.Uuid(), sa.ForeignKey("shares.id"), primary_key=True, nullable=False),
        sa.Column("competency_id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("assessment_level", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )

    op.create_table(
        "collaborator_feedback",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("share_id", sa.Uuid(), sa.ForeignKey("shares.id"), nullable=False),
        sa.Column("competency_id", sa.Integer(), nullable=False),
        sa.Column("collaborator_assessment_level", sa.Integer(), nullable=True),
        sa.Column("collaborator_notes", sa.Text(), nullable=True),
        sa.Column("client_seq", sa.BigInteger(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("share_id", "competency_id", name="uq_collaborator_feedback_share_competency"),
    )


def downgrade() -> None:
    op.drop_table("collaborator_feedback")
    op.drop_table("share_snapshots")
    op.drop_index("ix_shares_owner_collaborator_role", table_name="shares")
    op.drop_index("ix_shares_collaborator_email", table_name="shares")
    op.drop_index("ix_shares_original_user_id", table_name="shares")
    op.drop_table("shares")
    op.drop_index("ix_user_responses_user_role", table_name="user_responses")
    op.drop_table("user_responses")
