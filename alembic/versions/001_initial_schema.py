"""Initial schema - tenants, device_types, gateways, peripheral_devices, gateway_logs.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

gateway_status = sa.Enum("active", "inactive", "decommissioned", name="gateway_status_enum")
device_status = sa.Enum("online", "offline", "maintenance", name="device_status_enum")

DEFAULT_DEVICE_TYPES = [
    {"name": "sensor", "description": "Environmental or data collection sensors"},
    {"name": "actuator", "description": "Control devices that perform physical actions"},
    {"name": "controller", "description": "Logic control and processing devices"},
    {"name": "display", "description": "Information display devices"},
    {"name": "communication", "description": "Communication and networking devices"},
]


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("contact_email", sa.String(255), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name", name="uq_tenants_name"),
    )

    device_types = op.create_table(
        "device_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.UniqueConstraint("name", name="uq_device_types_name"),
    )

    op.create_table(
        "gateways",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("serial_number", sa.String(128), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("ipv4_address", sa.String(15), nullable=False),
        sa.Column("status", gateway_status, nullable=False, server_default="active"),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column(
            "tenant_id", sa.Uuid(), sa.ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True
        ),
        sa.UniqueConstraint("serial_number", name="uq_gateways_serial_number"),
        sa.UniqueConstraint("ipv4_address", name="uq_gateways_ipv4_address"),
    )
    op.create_index("ix_gateways_tenant_id", "gateways", ["tenant_id"])

    op.create_table(
        "peripheral_devices",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("uid", sa.BigInteger(), nullable=False),
        sa.Column("vendor", sa.Text(), nullable=False),
        sa.Column("status", device_status, nullable=False, server_default="offline"),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("last_seen_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "gateway_id", sa.Uuid(), sa.ForeignKey("gateways.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column(
            "device_type_id",
            sa.Integer(),
            sa.ForeignKey("device_types.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.UniqueConstraint("uid", name="uq_peripheral_devices_uid"),
    )
    op.create_index("ix_peripheral_devices_gateway_id", "peripheral_devices", ["gateway_id"])

    op.create_table(
        "gateway_logs",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "gateway_id",
            sa.Uuid(),
            sa.ForeignKey("gateways.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("details", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_gateway_logs_gateway_id", "gateway_logs", ["gateway_id"])

    op.bulk_insert(device_types, DEFAULT_DEVICE_TYPES)


def downgrade() -> None:
    op.drop_index("ix_gateway_logs_gateway_id", table_name="gateway_logs")
    op.drop_table("gateway_logs")
    op.drop_index("ix_peripheral_devices_gateway_id", table_name="peripheral_devices")
    op.drop_table("peripheral_devices")
    op.drop_index("ix_gateways_tenant_id", table_name="gateways")
    op.drop_table("gateways")
    op.drop_table("device_types")
    op.drop_table("tenants")
    device_status.drop(op.get_bind(), checkfirst=True)
    gateway_status.drop(op.get_bind(), checkfirst=True)
