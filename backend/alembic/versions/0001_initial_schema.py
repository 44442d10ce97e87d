"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "app_settings",
        sa.Column("id", sa.Text(), primary_key=True, server_default=sa.text("'main'")),
        sa.Column("default_slot_duration", sa.Integer(), nullable=False, server_default=sa.text("60")),
        sa.Column("default_max_capacity", sa.Integer(), nullable=False, server_default=sa.text("4")),
        sa.Column("default_price", sa.Float(), nullable=False, server_default=sa.text("50")),
        sa.Column("min_booking_advance", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("data_version", sa.Integer(), nullable=False, server_default=sa.text("1")),
    )

    op.create_table(
        "activities",
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("icon", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("enabled", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )

    op.create_table(
        "working_hours",
        sa.Column("day_of_week", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("enabled", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("start_time", sa.Text(), nullable=False, server_default=sa.text("'09:00'")),
        sa.Column("end_time", sa.Text(), nullable=False, server_default=sa.text("'18:00'")),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_working_hours_day"),
    )

    op.create_table(
        "closed_periods",
        sa.Column("start_date", sa.Text(), nullable=False),
        sa.Column("end_date", sa.Text(), nullable=False),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("reason", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("state", sa.Enum("draft", "published", name="closure_state"), nullable=False),
        sa.Column("pending_deletion", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.Text()),
    )

    op.create_table(
        "time_slots",
        sa.Column("activity_id", sa.Integer(), sa.ForeignKey("activities.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("date", sa.Text(), nullable=False),
        sa.Column("time", sa.Text(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("current_bookings", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "state",
            sa.Enum("draft", "published", "outside_hours", name="slot_state"),
            nullable=False,
        ),
        sa.Column("pending_deletion", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("original_date", sa.Text()),
        sa.Column("original_time", sa.Text()),
        sa.Column("original_duration", sa.Integer()),
        sa.Column("created_at", sa.Text()),
        sa.UniqueConstraint("date", "time", "activity_id", name="uq_slot_date_time_activity"),
        sa.CheckConstraint(
            "current_bookings >= 0 AND current_bookings <= max_capacity",
            name="ck_slot_capacity",
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_time_slots_activity_id", "time_slots", ["activity_id"])

    op.create_table(
        "bookings",
        sa.Column("slot_id", sa.Integer(), nullable=False),
        sa.Column("activity_id", sa.Integer(), nullable=False),
        sa.Column("activity_name", sa.Text(), nullable=False),
        sa.Column("customer_name", sa.Text(), nullable=False),
        sa.Column("customer_email", sa.Text(), nullable=False),
        sa.Column("number_of_people", sa.Integer(), nullable=False),
        sa.Column("total_price", sa.Float(), nullable=False),
        sa.Column("date", sa.Text(), nullable=False),
        sa.Column("time", sa.Text(), nullable=False),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_phone", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.CheckConstraint("number_of_people > 0", name="ck_booking_people"),
    )
    op.create_index("ix_bookings_slot_id", "bookings", ["slot_id"])


def downgrade():
    op.drop_index("ix_bookings_slot_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_time_slots_activity_id", table_name="time_slots")
    op.drop_table("time_slots")
    op.drop_table("closed_periods")
    op.drop_table("working_hours")
    op.drop_table("activities")
    op.drop_table("app_settings")
    sa.Enum(name="slot_state").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="closure_state").drop(op.get_bind(), checkfirst=True)
