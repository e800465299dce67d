"""Gateway and gateway audit log models."""

import enum
from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, BigInteger, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from gdms.database import Base
from gdms.utils.time import utcnow


class GatewayStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    decommissioned = "decommissioned"


class GatewayAction(str, enum.Enum):
    """Audit log action tags."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    DEVICE_ATTACHED = "DEVICE_ATTACHED"
    DEVICE_DETACHED = "DEVICE_DETACHED"


class Gateway(Base):
    """Gateway table - serial_number and ipv4_address are globally unique."""

    __tablename__ = "gateways"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    serial_number: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    ipv4_address: Mapped[str] = mapped_column(String(15), unique=True, nullable=False)
    status: Mapped[GatewayStatus] = mapped_column(
        Enum(GatewayStatus, name="gateway_status_enum"), nullable=False, default=GatewayStatus.active
    )
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    tenant_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True
    )


class GatewayLog(Base):
    """Gateway audit records - append-only, removed with their gateway."""

    __tablename__ = "gateway_logs"

    # SQLite only autoincrements INTEGER primary keys
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    gateway_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("gateways.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    details: Mapped[dict] = mapped_column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
