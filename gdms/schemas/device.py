"""Device request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gdms.models.device import DeviceStatus


class CreateDeviceRequest(BaseModel):
    """POST /devices request."""

    uid: int = Field(ge=0)
    vendor: str = Field(min_length=1)
    status: DeviceStatus | None = None
    device_type_id: int


class UpdateDeviceRequest(BaseModel):
    """PATCH /devices/{id} request - only fields that are sent get applied."""

    model_config = ConfigDict(extra="forbid")

    vendor: str | None = Field(default=None, min_length=1)
    status: DeviceStatus | None = None
    device_type_id: int | None = None


class DeviceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    uid: int
    vendor: str
    status: DeviceStatus
    created_at: datetime
    last_seen_at: datetime | None = None
    gateway_id: str | None = None
    device_type_id: int
