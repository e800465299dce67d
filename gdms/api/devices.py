"""Peripheral device endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from gdms.api.deps import DeviceManagerDep
from gdms.schemas.device import CreateDeviceRequest, DeviceResponse, UpdateDeviceRequest

router = APIRouter()


@router.post("/devices", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
async def create_device(body: CreateDeviceRequest, devices: DeviceManagerDep):
    """Create a new peripheral device."""
    return await devices.add_device(
        uid=body.uid,
        vendor=body.vendor,
        device_type_id=body.device_type_id,
        status=body.status,
    )


@router.get("/devices", response_model=list[DeviceResponse])
async def list_devices(devices: DeviceManagerDep):
    return await devices.list_devices()


@router.get("/devices/{device_id}", response_model=DeviceResponse)
async def get_device(device_id: UUID, devices: DeviceManagerDep):
    return await devices.get_device(str(device_id))


@router.patch("/devices/{device_id}", response_model=DeviceResponse)
async def update_device(device_id: UUID, body: UpdateDeviceRequest, devices: DeviceManagerDep):
    """Update vendor, status or device type. Gateway assignment goes through /gateways."""
    return await devices.update_device(str(device_id), body.model_dump(exclude_unset=True))


@router.delete("/devices/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_device(device_id: UUID, devices: DeviceManagerDep):
    await devices.delete_device(str(device_id))
