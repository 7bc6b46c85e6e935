# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial ClientDesk schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-01-15

Creates the users, groups, clientsv2, tasks, hosting_services and
assignees tables matching clientdesk/infrastructure/database/models/.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create ClientDesk tables."""
    # ==========================================================================
    # 1. users table
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="team_member"),
        sa.Column("permissions", sa.JSON, nullable=False),
        *_timestamps(),
        sa.CheckConstraint("role IN ('admin', 'team_member')", name="valid_user_role"),
    )
    op.create_index("ix_users_username", "users", ["username"])

    # ==========================================================================
    # 2. groups table
    # ==========================================================================
    op.create_table(
        "groups",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("name_key", sa.String(100), unique=True, nullable=False),
        *_timestamps(),
    )

    # ==========================================================================
    # 3. clientsv2 table (notes, tasks and login details embedded as JSON)
    # ==========================================================================
    op.create_table(
        "clientsv2",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("name_key", sa.String(200), unique=True, nullable=False),
        sa.Column("notes", sa.JSON, nullable=False),
        sa.Column("tasks", sa.JSON, nullable=False),
        sa.Column("login_details", sa.JSON, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_clientsv2_name_key", "clientsv2", ["name_key"])

    # ==========================================================================
    # 4. tasks table
    # ==========================================================================
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("client_name", sa.String(200), nullable=False),
        sa.Column("client_group", sa.String(100), nullable=False),
        sa.Column("completed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("priority", sa.String(10), nullable=False, server_default="Low"),
        sa.Column("status", sa.String(30), nullable=False, server_default="Waiting for Quote"),
        sa.Column("cms", sa.String(20), nullable=True),
        sa.Column("web_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("figma_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("asset_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("total_price", sa.Float, nullable=True),
        sa.Column("deposit", sa.Float, nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invoiced", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("paid", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("assignees", sa.JSON, nullable=False),
        sa.Column("assigned_to", sa.String(100), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=True),
        *_timestamps(),
    )

    # ==========================================================================
    # 5. hosting_services table
    # ==========================================================================
    op.create_table(
        "hosting_services",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("client_name", sa.String(200), nullable=False),
        sa.Column("website_name", sa.String(200), nullable=False),
        sa.Column("website_url", sa.String(500), nullable=True),
        sa.Column("hosting_provider", sa.String(200), nullable=False),
        sa.Column("package_type", sa.String(100), nullable=False),
        sa.Column("cost", sa.Float, nullable=False),
        sa.Column("currency", sa.String(10), nullable=False, server_default="GBP"),
        sa.Column("billing_cycle", sa.String(20), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("auto_renew", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("contact_email", sa.String(255), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(100), nullable=True),
        sa.Column("updated_by", sa.String(100), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "billing_cycle IN ('monthly', 'yearly', 'one-time')",
            name="valid_billing_cycle",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'expired', 'expiring_soon')",
            name="valid_hosting_status",
        ),
    )
    op.create_index("ix_hosting_services_end_date", "hosting_services", ["end_date"])

    # ==========================================================================
    # 6. assignees table
    # ==========================================================================
    op.create_table(
        "assignees",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("name_key", sa.String(50), unique=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    """Drop ClientDesk tables."""
    op.drop_table("assignees")
    op.drop_table("hosting_services")
    op.drop_table("tasks")
    op.drop_table("clientsv2")
    op.drop_table("groups")
    op.drop_table("users")
