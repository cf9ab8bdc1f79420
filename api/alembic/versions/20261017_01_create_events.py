"""
create events table for analysis telemetry

Revision ID: create_events_20261017
Revises: None
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_events_20261017'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("platform", sa.Text(), nullable=False),
        # SHA-256 hex of the sender domain; the domain itself is never stored
        sa.Column("domain_hash", sa.String(64), nullable=False),
        sa.Column("verdict", sa.Text(), nullable=False, server_default="unknown"),
        sa.Column("risk_score", sa.Float(), nullable=True),
        sa.Column("cue_types", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
    )
    op.create_index("idx_events_created_at", "events", ["created_at"])
    op.create_index("idx_events_domain_hash", "events", ["domain_hash"])


def downgrade() -> None:
    op.drop_index("idx_events_domain_hash", table_name="events")
    op.drop_index("idx_events_created_at", table_name="events")
    op.drop_table("events")
