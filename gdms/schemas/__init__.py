"""Request/response schemas."""

from gdms.schemas.device import CreateDeviceRequest, DeviceResponse, UpdateDeviceRequest
from gdms.schemas.gateway import (
    CreateGatewayRequest,
    GatewayDeviceSummary,
    GatewayLogResponse,
    GatewayResponse,
    GatewayWithDevicesResponse,
    UpdateGatewayRequest,
)

__all__ = [
    "CreateDeviceRequest",
    "DeviceResponse",
    "UpdateDeviceRequest",
    "CreateGatewayRequest",
    "GatewayDeviceSummary",
    "GatewayLogResponse",
    "GatewayResponse",
    "GatewayWithDevicesResponse",
    "UpdateGatewayRequest",
]
