"""Initial schema — queues, routing rules, mailbox configurations.

Revision ID: 001
Revises: None
Create Date: 2026-02-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Queues
    op.create_table(
        "queues",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_queues_company_name", "queues", ["company_id", "name"], unique=True)
    op.create_index("idx_queues_is_active", "queues", ["is_active"])

    # Routing rules
    op.create_table(
        "routing_rules",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, nullable=False),
        sa.Column(
            "queue_id",
            sa.Integer,
            sa.ForeignKey("queues.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("match_type", sa.String(50), nullable=False),
        sa.Column("match_operator", sa.String(50), nullable=False),
        sa.Column("match_value", sa.String(1000), nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("auto_assign_agent_id", sa.Integer, nullable=True),
        sa.Column("auto_set_priority", sa.String(20), nullable=True),
        sa.Column("auto_add_tags", sa.String(1000), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "idx_routing_rules_company_sort", "routing_rules", ["company_id", "sort_order"]
    )
    op.create_index("idx_routing_rules_queue", "routing_rules", ["queue_id"])
    op.create_index("idx_routing_rules_is_active", "routing_rules", ["is_active"])

    # Mailbox configurations
    op.create_table(
        "email_configurations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, nullable=False),
        sa.Column("shared_mailbox_address", sa.String(256), nullable=False),
        sa.Column("display_name", sa.String(200), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("polling_interval_minutes", sa.Integer, nullable=False, server_default="2"),
        sa.Column("last_polled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("auto_create_tickets", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("default_priority", sa.String(20), nullable=False, server_default="Medium"),
    )
    op.create_index(
        "idx_email_configurations_company_mailbox",
        "email_configurations",
        ["company_id", "shared_mailbox_address"],
        unique=True,
    )
    op.create_index("idx_email_configurations_is_active", "email_configurations", ["is_active"])


def downgrade() -> None:
    op.drop_table("email_configurations")
    op.drop_table("routing_rules")
    op.drop_table("queues")
