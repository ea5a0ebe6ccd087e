"""Create parcels, payments, users, riders and trackings tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema for the five collections.
How:   Generic UUID and timezone-aware TIMESTAMP columns; ids are generated
       by the application, timestamps are stamped by the services.

Rollback: downgrade() drops all five tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "parcels",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255)),
        sa.Column("parcel_type", sa.String(50)),
        sa.Column("weight", sa.Float()),
        sa.Column("cost", sa.Float()),
        sa.Column("tracking_id", sa.String(64)),
        sa.Column("sender_name", sa.String(255)),
        sa.Column("sender_phone", sa.String(50)),
        sa.Column("sender_region", sa.String(100)),
        sa.Column("sender_district", sa.String(100)),
        sa.Column("sender_address", sa.Text()),
        sa.Column("receiver_name", sa.String(255)),
        sa.Column("receiver_phone", sa.String(50)),
        sa.Column("receiver_region", sa.String(100)),
        sa.Column("receiver_district", sa.String(100)),
        sa.Column("receiver_address", sa.Text()),
        sa.Column("created_by", sa.String(320), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "payment_status", sa.String(50), nullable=False,
            server_default=sa.text("'unpaid'"),
        ),
        sa.Column(
            "delivery_status", sa.String(50), nullable=False,
            server_default=sa.text("'pending'"),
            comment="Free-form; riders report their status verbatim",
        ),
        sa.Column("assigned_rider_id", sa.Uuid()),
        sa.Column("assigned_rider_email", sa.String(320)),
        sa.Column("assigned_rider_name", sa.String(255)),
        sa.Column("assigned_at", sa.TIMESTAMP(timezone=True)),
        sa.Column("picked_at", sa.TIMESTAMP(timezone=True)),
        sa.Column("delivered_at", sa.TIMESTAMP(timezone=True)),
        sa.Column("cashout_status", sa.String(50)),
        sa.Column("cashed_out_at", sa.TIMESTAMP(timezone=True)),
        sa.PrimaryKeyConstraint("id", name="pk_parcels"),
    )
    op.create_index("ix_parcels_tracking_id", "parcels", ["tracking_id"])
    op.create_index(
        "idx_parcels_created_by_created_at", "parcels", ["created_by", "created_at"],
    )
    op.create_index(
        "idx_parcels_rider_email", "parcels", ["assigned_rider_email", "delivery_status"],
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("parcel_id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("payment_method", sa.String(50)),
        sa.Column("transaction_id", sa.String(255)),
        sa.Column("paid_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_payments"),
    )
    op.create_index("ix_payments_parcel_id", "payments", ["parcel_id"])
    op.create_index("ix_payments_email", "payments", ["email"])

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("role", sa.String(20), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("last_log_in", sa.TIMESTAMP(timezone=True)),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "riders",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255)),
        sa.Column("email", sa.String(320)),
        sa.Column("phone", sa.String(50)),
        sa.Column("age", sa.Integer()),
        sa.Column("region", sa.String(100)),
        sa.Column("district", sa.String(100)),
        sa.Column("national_id", sa.String(100)),
        sa.Column("bike_brand", sa.String(100)),
        sa.Column("bike_registration", sa.String(100)),
        sa.Column(
            "status", sa.String(20), nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column(
            "work_status", sa.String(20), nullable=False,
            server_default=sa.text("'idle'"),
        ),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_riders"),
    )
    op.create_index("ix_riders_email", "riders", ["email"])
    op.create_index("ix_riders_district", "riders", ["district"])
    op.create_index("ix_riders_status", "riders", ["status"])

    op.create_table(
        "trackings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tracking_id", sa.String(64), nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("message", sa.Text()),
        sa.Column("update_by", sa.String(320)),
        sa.Column("timestamp", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_trackings"),
    )
    op.create_index(
        "idx_trackings_tracking_id_timestamp", "trackings", ["tracking_id", "timestamp"],
    )


def downgrade() -> None:
    op.drop_index("idx_trackings_tracking_id_timestamp", table_name="trackings")
    op.drop_table("trackings")

    op.drop_index("ix_riders_status", table_name="riders")
    op.drop_index("ix_riders_district", table_name="riders")
    op.drop_index("ix_riders_email", table_name="riders")
    op.drop_table("riders")

    op.drop_table("users")

    op.drop_index("ix_payments_email", table_name="payments")
    op.drop_index("ix_payments_parcel_id", table_name="payments")
    op.drop_table("payments")

    op.drop_index("idx_parcels_rider_email", table_name="parcels")
    op.drop_index("idx_parcels_created_by_created_at", table_name="parcels")
    op.drop_index("ix_parcels_tracking_id", table_name="parcels")
    op.drop_table("parcels")
