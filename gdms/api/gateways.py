"""Gateway endpoints, including device attach/detach and the audit trail."""

from uuid import UUID

from fastapi import APIRouter, status

from gdms.api.deps import DeviceManagerDep, GatewayManagerDep
from gdms.schemas.device import DeviceResponse
from gdms.schemas.gateway import (
    CreateGatewayRequest,
    GatewayLogResponse,
    GatewayResponse,
    GatewayWithDevicesResponse,
    UpdateGatewayRequest,
)

router = APIRouter()


@router.post("/gateways", response_model=GatewayResponse, status_code=status.HTTP_201_CREATED)
async def create_gateway(body: CreateGatewayRequest, gateways: GatewayManagerDep):
    """Create a gateway. 409 if the serial number or IP address is taken."""
    return await gateways.create_gateway(**body.model_dump())


@router.get("/gateways", response_model=list[GatewayResponse])
async def list_gateways(gateways: GatewayManagerDep):
    return await gateways.list_gateways()


@router.get("/gateways/{gateway_id}", response_model=GatewayWithDevicesResponse)
async def get_gateway(gateway_id: UUID, gateways: GatewayManagerDep):
    """Gateway details with its attached devices."""
    return await gateways.get_gateway_with_devices(str(gateway_id))


@router.patch("/gateways/{gateway_id}", response_model=GatewayResponse)
async def update_gateway(gateway_id: UUID, body: UpdateGatewayRequest, gateways: GatewayManagerDep):
    """Update gateway details (except serial number)."""
    return await gateways.update_gateway(str(gateway_id), body.model_dump(exclude_unset=True))


@router.delete("/gateways/{gateway_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gateway(gateway_id: UUID, gateways: GatewayManagerDep):
    """Delete a gateway. Attached devices become orphaned."""
    await gateways.delete_gateway(str(gateway_id))


@router.get("/gateways/{gateway_id}/devices", response_model=list[DeviceResponse])
async def list_gateway_devices(gateway_id: UUID, gateways: GatewayManagerDep, devices: DeviceManagerDep):
    await gateways.get_gateway(str(gateway_id))
    return await devices.list_devices_by_gateway(str(gateway_id))


@router.get("/gateways/{gateway_id}/logs", response_model=list[GatewayLogResponse])
async def list_gateway_logs(gateway_id: UUID, gateways: GatewayManagerDep):
    return await gateways.list_gateway_logs(str(gateway_id))


@router.post("/gateways/{gateway_id}/devices/{device_id}", response_model=GatewayWithDevicesResponse)
async def attach_device(gateway_id: UUID, device_id: UUID, gateways: GatewayManagerDep):
    """Attach a device. 409 if the gateway is full or the device is assigned elsewhere."""
    return await gateways.attach_device(str(gateway_id), str(device_id))


@router.delete("/gateways/{gateway_id}/devices/{device_id}", response_model=GatewayWithDevicesResponse)
async def detach_device(gateway_id: UUID, device_id: UUID, gateways: GatewayManagerDep):
    return await gateways.detach_device(str(gateway_id), str(device_id))
