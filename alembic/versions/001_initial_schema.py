"""initial schema: hosts, metrics, inefficient hosts, channels, change records

Revision ID: 001_initial
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COUNTS_BALANCED = "task_count = success_count + failure_count + empty_count + dedup_count"


def _count_columns():
    return [
        sa.Column("task_count", sa.Integer(), nullable=False),
        sa.Column("success_count", sa.Integer(), nullable=False),
        sa.Column("failure_count", sa.Integer(), nullable=False),
        sa.Column("empty_count", sa.Integer(), nullable=False),
        sa.Column("dedup_count", sa.Integer(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "hosts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ip", sa.String(45), nullable=False),
        sa.Column("vendor", sa.String(50), nullable=False),
        sa.Column("region", sa.String(50), nullable=False),
        sa.Column("cpu_cores", sa.Integer(), nullable=False),
        sa.Column("memory_gb", sa.Integer(), nullable=False),
        sa.Column("disk_gb", sa.Integer(), nullable=False),
        sa.Column("bandwidth_mbps", sa.Integer(), nullable=False),
        sa.Column("os_name", sa.String(100), nullable=False),
        sa.Column("online_date", sa.Date(), nullable=False),
        sa.Column("owner", sa.String(100), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("shared_department", sa.String(100), nullable=True),
        sa.Column("enable_status", sa.Integer(), nullable=False),
        sa.Column("management_status", sa.Integer(), nullable=False),
        sa.Column("device_status", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_hosts_ip", "hosts", ["ip"], unique=True)
    op.create_index("ix_hosts_region", "hosts", ["region"])
    op.create_index("ix_hosts_owner", "hosts", ["owner"])
    op.create_index("ix_hosts_enable_status", "hosts", ["enable_status"])
    op.create_index("ix_hosts_management_status", "hosts", ["management_status"])

    op.create_table(
        "host_metrics",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ip", sa.String(45), nullable=False),
        sa.Column("sample_time", sa.Date(), nullable=False),
        sa.Column("cpu_percent", sa.Float(), nullable=False),
        sa.Column("memory_percent", sa.Float(), nullable=False),
        sa.Column("disk_percent", sa.Float(), nullable=False),
        sa.Column("net_in_rate", sa.Float(), nullable=False),
        sa.Column("net_out_rate", sa.Float(), nullable=False),
        sa.Column("process_count", sa.Integer(), nullable=False),
        sa.Column("task_count", sa.Integer(), nullable=False),
        sa.Column("running_processes", sa.Text(), nullable=True),
    )
    op.create_index("ix_host_metrics_ip", "host_metrics", ["ip"])
    op.create_index("ix_host_metrics_sample_time", "host_metrics", ["sample_time"])

    op.create_table(
        "inefficient_hosts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ip", sa.String(45), nullable=False),
        sa.Column("sample_time", sa.Date(), nullable=False),
        *[
            sa.Column(f"{name}_{period}", sa.Float(), nullable=False)
            for period in ("week", "month")
            for name in ("cpu_percent", "memory_percent", "disk_percent", "net_in_rate", "net_out_rate")
        ],
    )
    op.create_index("ix_inefficient_hosts_ip", "inefficient_hosts", ["ip"])
    op.create_index("ix_inefficient_hosts_sample_time", "inefficient_hosts", ["sample_time"])

    op.create_table(
        "channel_summaries",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("channel_name", sa.String(50), nullable=False),
        sa.Column("task_type", sa.String(10), nullable=False),
        sa.Column("sample_time", sa.Date(), nullable=False),
        *_count_columns(),
        sa.CheckConstraint(COUNTS_BALANCED, name="ck_channel_summaries_counts"),
    )
    op.create_index("ix_channel_summaries_id", "channel_summaries", ["id"], unique=True)
    op.create_index("ix_channel_summaries_channel_name", "channel_summaries", ["channel_name"])
    op.create_index("ix_channel_summaries_sample_time", "channel_summaries", ["sample_time"])

    op.create_table(
        "channel_details",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "parent_id", sa.String(64),
            sa.ForeignKey("channel_summaries.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("business_name", sa.String(50), nullable=False),
        sa.Column("ip", sa.String(45), nullable=False),
        sa.Column("sample_time", sa.Date(), nullable=False),
        *_count_columns(),
        sa.CheckConstraint(COUNTS_BALANCED, name="ck_channel_details_counts"),
    )
    op.create_index("ix_channel_details_parent_id", "channel_details", ["parent_id"])
    op.create_index("ix_channel_details_ip", "channel_details", ["ip"])
    op.create_index("ix_channel_details_sample_time", "channel_details", ["sample_time"])

    op.create_table(
        "host_change_records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ip", sa.String(45), nullable=False),
        sa.Column("sample_time", sa.Date(), nullable=False),
        sa.Column("operation_type", sa.Integer(), nullable=False),
        sa.Column("operator", sa.String(100), nullable=False),
        sa.Column("old_value", sa.String(20), nullable=False),
        sa.Column("new_value", sa.String(20), nullable=False),
        sa.Column("remark", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_host_change_records_ip", "host_change_records", ["ip"])
    op.create_index("ix_host_change_records_sample_time", "host_change_records", ["sample_time"])


def downgrade() -> None:
    op.drop_table("host_change_records")
    op.drop_table("channel_details")
    op.drop_table("channel_summaries")
    op.drop_table("inefficient_hosts")
    op.drop_table("host_metrics")
    op.drop_table("hosts")
