"""Peripheral device and device type models."""

import enum
from datetime import datetime
from uuid import uuid4

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gdms.database import Base
from gdms.utils.time import utcnow


class DeviceStatus(str, enum.Enum):
    online = "online"
    offline = "offline"
    maintenance = "maintenance"


class DeviceType(Base):
    """Reference data - sensor, actuator, controller, ..."""

    __tablename__ = "device_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class PeripheralDevice(Base):
    """Peripheral device table. gateway_id is null while the device is orphaned."""

    __tablename__ = "peripheral_devices"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    uid: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False)
    vendor: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[DeviceStatus] = mapped_column(
        Enum(DeviceStatus, name="device_status_enum"), nullable=False, default=DeviceStatus.offline
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_seen_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    gateway_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("gateways.id", ondelete="SET NULL"), nullable=True, index=True
    )
    device_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("device_types.id", ondelete="RESTRICT"), nullable=False
    )
