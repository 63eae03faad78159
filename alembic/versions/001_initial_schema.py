# alembic/versions/001_initial_schema.py
"""Initial schema - Users, slots and swap requests

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Status columns are VARCHAR with CHECK constraints rather than native enums.
A partial unique index allows at most one PENDING request per ordered
(requester, responder, my slot, their slot) tuple.
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SLOT_STATUSES = ("BUSY", "SWAPPABLE", "SWAP_PENDING")
SWAP_REQUEST_STATUSES = ("PENDING", "ACCEPTED", "REJECTED")


def _in_list(column: str, values: Sequence[str]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    """Create users, slots and swap_requests."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "slots",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("owner_id", sa.String(26), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(12), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.CheckConstraint("end_time > start_time", name="ck_slots_time_order"),
        sa.CheckConstraint(_in_list("status", SLOT_STATUSES), name="slot_status"),
    )
    op.create_index("ix_slots_id", "slots", ["id"])
    op.create_index("ix_slots_owner_id", "slots", ["owner_id"])
    op.create_index("ix_slots_status", "slots", ["status"])
    op.create_index("ix_slots_status_owner", "slots", ["status", "owner_id"])

    op.create_table(
        "swap_requests",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("requester_id", sa.String(26), nullable=False),
        sa.Column("responder_id", sa.String(26), nullable=False),
        sa.Column("my_slot_id", sa.String(26), nullable=False),
        sa.Column("their_slot_id", sa.String(26), nullable=False),
        sa.Column("status", sa.String(8), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["responder_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["my_slot_id"], ["slots.id"]),
        sa.ForeignKeyConstraint(["their_slot_id"], ["slots.id"]),
        sa.CheckConstraint(
            _in_list("status", SWAP_REQUEST_STATUSES), name="swap_request_status"
        ),
    )
    op.create_index("ix_swap_requests_id", "swap_requests", ["id"])
    op.create_index("ix_swap_requests_requester_id", "swap_requests", ["requester_id"])
    op.create_index("ix_swap_requests_responder_id", "swap_requests", ["responder_id"])
    op.create_index("ix_swap_requests_my_slot_id", "swap_requests", ["my_slot_id"])
    op.create_index("ix_swap_requests_their_slot_id", "swap_requests", ["their_slot_id"])
    op.create_index("ix_swap_requests_status", "swap_requests", ["status"])
    op.create_index(
        "uq_swap_requests_pending_tuple",
        "swap_requests",
        ["requester_id", "responder_id", "my_slot_id", "their_slot_id"],
        unique=True,
        sqlite_where=sa.text("status = 'PENDING'"),
        postgresql_where=sa.text("status = 'PENDING'"),
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_index("uq_swap_requests_pending_tuple", table_name="swap_requests")
    op.drop_table("swap_requests")
    op.drop_table("slots")
    op.drop_table("users")
