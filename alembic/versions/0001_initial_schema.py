"""Create users, plants and push subscription tables"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("recovery_key", sa.String(length=64), nullable=True),
        sa.Column("notification_time", sa.String(length=5), server_default=sa.text("'09:00'"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_recovery_key", "users", ["recovery_key"], unique=True)

    op.create_table(
        "plants",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=False),
        sa.Column("water_frequency_days", sa.Integer(), nullable=False),
        sa.Column("last_watered_date", sa.Date(), nullable=False),
        sa.Column("fertilize_frequency_days", sa.Integer(), nullable=True),
        sa.Column("last_fertilized_date", sa.Date(), nullable=True),
        sa.Column("repot_frequency_months", sa.Integer(), nullable=True),
        sa.Column("last_repotted_date", sa.Date(), nullable=True),
        sa.Column("prune_frequency_months", sa.Integer(), nullable=True),
        sa.Column("last_pruned_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), server_default=sa.text("''"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.CheckConstraint("water_frequency_days > 0", name="ck_plants_water_frequency_positive"),
    )
    op.create_index("ix_plants_user_id", "plants", ["user_id"], unique=False)
    op.create_index("ix_plants_last_watered_date", "plants", ["last_watered_date"], unique=False)

    op.create_table(
        "push_subscriptions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("endpoint", sa.Text(), nullable=False),
        sa.Column("p256dh", sa.String(length=255), nullable=False),
        sa.Column("auth", sa.String(length=255), nullable=False),
        sa.Column("user_agent", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
    )
    op.create_index("ix_push_subscriptions_user_id", "push_subscriptions", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_push_subscriptions_user_id", table_name="push_subscriptions")
    op.drop_table("push_subscriptions")
    op.drop_index("ix_plants_last_watered_date", table_name="plants")
    op.drop_index("ix_plants_user_id", table_name="plants")
    op.drop_table("plants")
    op.drop_index("ix_users_recovery_key", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
