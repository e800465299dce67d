"""Database models."""

from gdms.models.tenant import Tenant
from gdms.models.gateway import Gateway, GatewayAction, GatewayLog, GatewayStatus
from gdms.models.device import DeviceStatus, DeviceType, PeripheralDevice

__all__ = [
    "Tenant",
    "Gateway",
    "GatewayAction",
    "GatewayLog",
    "GatewayStatus",
    "DeviceStatus",
    "DeviceType",
    "PeripheralDevice",
]
