"""Initial schema: users, airports and flights.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("provider", sa.String(32), nullable=False, server_default="local"),
        sa.Column("provider_sub", sa.String(256), nullable=False, server_default=""),
        sa.Column("email", sa.String(256), nullable=False, server_default=""),
        sa.Column("display_name", sa.String(256), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "airports",
        sa.Column("icao", sa.String(4), primary_key=True),
        sa.Column("iata", sa.String(3), nullable=True),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lon", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "flights",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(64),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("flight_number", sa.String(32), nullable=True),
        sa.Column("aircraft_reg", sa.String(32), nullable=False),
        sa.Column("aircraft_type", sa.String(64), nullable=False),
        sa.Column("dep_airport", sa.String(4), nullable=False, index=True),
        sa.Column("arr_airport", sa.String(4), nullable=False, index=True),
        sa.Column("block_off", sa.DateTime(timezone=True), nullable=True),
        sa.Column("takeoff", sa.DateTime(timezone=True), nullable=True),
        sa.Column("landing", sa.DateTime(timezone=True), nullable=True),
        sa.Column("block_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_block", sa.Integer, nullable=True),
        sa.Column("duration_flight", sa.Integer, nullable=True),
        sa.Column("day_landings", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("night_landings", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("flights")
    op.drop_table("airports")
    op.drop_table("users")
