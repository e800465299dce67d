"""Gateway request/response schemas."""

import ipaddress
import uuid
from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from gdms.models.device import DeviceStatus
from gdms.models.gateway import GatewayStatus


def _check_ipv4(v: str) -> str:
    try:
        return str(ipaddress.IPv4Address(v))
    except ValueError as exc:
        raise ValueError(f"{v!r} is not a valid IPv4 address") from exc


IPv4Str = Annotated[str, AfterValidator(_check_ipv4)]


def _check_uuid(v: str) -> str:
    try:
        return str(uuid.UUID(v))
    except ValueError as exc:
        raise ValueError(f"{v!r} is not a valid UUID") from exc


UUIDStr = Annotated[str, AfterValidator(_check_uuid)]


class CreateGatewayRequest(BaseModel):
    """POST /gateways request."""

    serial_number: str = Field(min_length=1)
    name: str = Field(min_length=1)
    ipv4_address: IPv4Str
    status: GatewayStatus | None = None
    location: str | None = None
    tenant_id: UUIDStr | None = None


class UpdateGatewayRequest(BaseModel):
    """PATCH /gateways/{id} request. serial_number is immutable and rejected."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    ipv4_address: IPv4Str | None = None
    status: GatewayStatus | None = None
    location: str | None = None


class GatewayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    serial_number: str
    name: str
    ipv4_address: str
    status: GatewayStatus
    location: str | None = None
    created_at: datetime
    updated_at: datetime
    tenant_id: str | None = None


class GatewayDeviceSummary(BaseModel):
    """Device as listed under its gateway."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    uid: int
    vendor: str
    status: DeviceStatus
    created_at: datetime
    last_seen_at: datetime | None = None


class GatewayWithDevicesResponse(GatewayResponse):
    devices_count: int
    devices: list[GatewayDeviceSummary] = Field(default_factory=list)


class GatewayLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    gateway_id: str
    action: str
    details: dict[str, Any]
    created_at: datetime
