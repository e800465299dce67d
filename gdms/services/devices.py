"""Peripheral device management."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gdms.errors import Conflict, Invalid, NotFound, transactional
from gdms.models import DeviceStatus, DeviceType, PeripheralDevice
from gdms.schemas.device import DeviceResponse
from gdms.storage.repositories import Repository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"vendor", "status", "device_type_id"})


class DeviceManager:
    """CRUD for peripheral devices. Gateway assignment lives in GatewayManager."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.devices = Repository(db, PeripheralDevice)
        self.device_types = Repository(db, DeviceType)

    async def _require_device_type(self, device_type_id: int) -> DeviceType:
        device_type = await self.device_types.find_by_id(device_type_id)
        if not device_type:
            raise NotFound(f"Device type with ID {device_type_id} not found")
        return device_type

    async def _require_device(self, device_id: str) -> PeripheralDevice:
        device = await self.devices.find_by_id(device_id)
        if not device:
            raise NotFound(f"Device with ID {device_id} not found")
        return device

    @transactional
    async def add_device(
        self,
        uid: int,
        vendor: str,
        device_type_id: int,
        status: DeviceStatus | None = None,
    ) -> DeviceResponse:
        if await self.devices.find_by_field("uid", uid):
            raise Conflict(f"Device with UID {uid} already exists")
        await self._require_device_type(device_type_id)

        device = await self.devices.insert(
            PeripheralDevice(
                uid=uid,
                vendor=vendor,
                status=status or DeviceStatus.offline,
                device_type_id=device_type_id,
            )
        )
        await self.db.commit()
        logger.info("Device %s created (uid=%s)", device.id, uid)
        return DeviceResponse.model_validate(device)

    @transactional
    async def update_device(self, device_id: str, changes: dict[str, Any]) -> DeviceResponse:
        """Apply a partial update; keys absent from ``changes`` keep their value."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise Invalid(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        cleared = sorted(k for k, v in changes.items() if v is None)
        if cleared:
            raise Invalid(f"Fields cannot be null: {', '.join(cleared)}")

        device = await self._require_device(device_id)
        if "device_type_id" in changes:
            await self._require_device_type(changes["device_type_id"])

        device = await self.devices.update(device, changes)
        await self.db.commit()
        logger.info("Device %s updated: %s", device_id, sorted(changes))
        return DeviceResponse.model_validate(device)

    @transactional
    async def delete_device(self, device_id: str) -> None:
        device = await self._require_device(device_id)
        await self.devices.delete(device)
        await self.db.commit()
        logger.info("Device %s deleted", device_id)

    @transactional
    async def get_device(self, device_id: str) -> DeviceResponse:
        return DeviceResponse.model_validate(await self._require_device(device_id))

    @transactional
    async def list_devices(self) -> list[DeviceResponse]:
        """All devices, most recent first."""
        devices = await self.devices.find_all_ordered("created_at")
        return [DeviceResponse.model_validate(d) for d in devices]

    @transactional
    async def list_devices_by_gateway(self, gateway_id: str) -> list[DeviceResponse]:
        """Devices currently attached to ``gateway_id``, most recent first."""
        devices = await self.devices.find_all_ordered("created_at", gateway_id=gateway_id)
        return [DeviceResponse.model_validate(d) for d in devices]
