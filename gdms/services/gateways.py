"""
Gateway management: CRUD, device attach/detach and the audit trail.

Every mutating operation runs as one transaction on the manager's session.
Uniqueness and capacity checks happen before the write; storage constraints
catch whatever a concurrent caller slips in between (surfaced as Conflict by
``transactional``). Attach, detach, update and delete lock the gateway row
so the read-check-write sequence is atomic per gateway.

Lock order is gateway row first, then device row, in every operation.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gdms.config import settings
from gdms.errors import Conflict, Invalid, NotFound, transactional
from gdms.models import Gateway, GatewayAction, GatewayStatus, PeripheralDevice, Tenant
from gdms.schemas.gateway import (
    GatewayDeviceSummary,
    GatewayLogResponse,
    GatewayResponse,
    GatewayWithDevicesResponse,
)
from gdms.services.audit import AuditLogger
from gdms.storage.repositories import Repository
from gdms.utils.time import utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "ipv4_address", "status", "location"})
NULLABLE_FIELDS = frozenset({"location"})


def _snapshot(gateway: Gateway) -> dict[str, Any]:
    """JSON-safe copy of a gateway's state for audit details."""
    return GatewayResponse.model_validate(gateway).model_dump(mode="json")


class GatewayManager:
    def __init__(
        self,
        db: AsyncSession,
        audit: AuditLogger | None = None,
        device_limit: int | None = None,
    ):
        self.db = db
        self.gateways = Repository(db, Gateway)
        self.devices = Repository(db, PeripheralDevice)
        self.tenants = Repository(db, Tenant)
        self.audit = audit or AuditLogger(db)
        self.device_limit = settings.gateway_device_limit if device_limit is None else device_limit

    async def _require_gateway(self, gateway_id: str, *, for_update: bool = False) -> Gateway:
        gateway = await self.gateways.find_by_id(gateway_id, for_update=for_update)
        if not gateway:
            raise NotFound(f"Gateway with ID {gateway_id} not found")
        return gateway

    async def _with_devices(self, gateway: Gateway) -> GatewayWithDevicesResponse:
        devices = await self.devices.find_all_ordered("created_at", gateway_id=gateway.id)
        return GatewayWithDevicesResponse(
            **GatewayResponse.model_validate(gateway).model_dump(),
            devices_count=len(devices),
            devices=[GatewayDeviceSummary.model_validate(d) for d in devices],
        )

    @transactional
    async def create_gateway(
        self,
        serial_number: str,
        name: str,
        ipv4_address: str,
        status: GatewayStatus | None = None,
        location: str | None = None,
        tenant_id: str | None = None,
    ) -> GatewayResponse:
        if await self.gateways.find_by_field("serial_number", serial_number):
            raise Conflict(f"Gateway with serial number {serial_number} already exists")
        if await self.gateways.find_by_field("ipv4_address", ipv4_address):
            raise Conflict(f"Gateway with IP address {ipv4_address} already exists")
        if tenant_id is not None and not await self.tenants.find_by_id(tenant_id):
            raise NotFound(f"Tenant with ID {tenant_id} not found")

        gateway = await self.gateways.insert(
            Gateway(
                serial_number=serial_number,
                name=name,
                ipv4_address=ipv4_address,
                status=status or GatewayStatus.active,
                location=location,
                tenant_id=tenant_id,
            )
        )
        await self.audit.record(gateway.id, GatewayAction.CREATED, {"gateway": _snapshot(gateway)})
        await self.db.commit()
        logger.info("Gateway %s created (serial=%s, ip=%s)", gateway.id, serial_number, ipv4_address)
        return GatewayResponse.model_validate(gateway)

    @transactional
    async def get_gateway(self, gateway_id: str) -> GatewayResponse:
        return GatewayResponse.model_validate(await self._require_gateway(gateway_id))

    @transactional
    async def get_gateway_with_devices(self, gateway_id: str) -> GatewayWithDevicesResponse:
        return await self._with_devices(await self._require_gateway(gateway_id))

    @transactional
    async def list_gateways(self) -> list[GatewayResponse]:
        """All gateways, most recent first."""
        gateways = await self.gateways.find_all_ordered("created_at")
        return [GatewayResponse.model_validate(g) for g in gateways]

    @transactional
    async def update_gateway(self, gateway_id: str, changes: dict[str, Any]) -> GatewayResponse:
        """Apply a partial update. serial_number is immutable."""
        if "serial_number" in changes:
            raise Invalid("serial_number cannot be changed")
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise Invalid(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        cleared = sorted(k for k, v in changes.items() if v is None and k not in NULLABLE_FIELDS)
        if cleared:
            raise Invalid(f"Fields cannot be null: {', '.join(cleared)}")

        gateway = await self._require_gateway(gateway_id, for_update=True)
        new_ip = changes.get("ipv4_address")
        if new_ip is not None and new_ip != gateway.ipv4_address:
            if await self.gateways.find_by_field("ipv4_address", new_ip, exclude_id=gateway.id):
                raise Conflict(f"Gateway with IP address {new_ip} already exists")

        gateway = await self.gateways.update(gateway, {**changes, "updated_at": utcnow()})
        await self.audit.record(gateway.id, GatewayAction.UPDATED, {"gateway": _snapshot(gateway)})
        await self.db.commit()
        logger.info("Gateway %s updated: %s", gateway_id, sorted(changes))
        return GatewayResponse.model_validate(gateway)

    @transactional
    async def delete_gateway(self, gateway_id: str) -> None:
        """
        Delete a gateway. Its logs go with it; its devices are orphaned.

        The DELETED entry is written while the gateway row still exists,
        since gateway_logs.gateway_id must reference a live gateway.
        """
        gateway = await self._require_gateway(gateway_id, for_update=True)
        attached = await self.devices.count(gateway_id=gateway.id)
        await self.audit.record(
            gateway.id,
            GatewayAction.DELETED,
            {"gateway": _snapshot(gateway), "devices_count": attached},
        )
        orphaned = await self.devices.update_where({"gateway_id": gateway.id}, {"gateway_id": None})
        await self.gateways.delete(gateway)
        await self.db.commit()
        logger.info("Gateway %s deleted, %d device(s) orphaned", gateway_id, orphaned)

    @transactional
    async def attach_device(self, gateway_id: str, device_id: str) -> GatewayWithDevicesResponse:
        gateway = await self._require_gateway(gateway_id, for_update=True)
        if await self.devices.count(gateway_id=gateway.id) >= self.device_limit:
            raise Conflict(f"Gateway device limit exceeded ({self.device_limit} devices)")

        device = await self.devices.find_by_id(device_id, for_update=True)
        if not device:
            raise NotFound(f"Device with ID {device_id} not found")
        if device.gateway_id is not None:
            raise Conflict(f"Device {device_id} is already assigned to gateway {device.gateway_id}")

        device = await self.devices.update(device, {"gateway_id": gateway.id})
        await self.audit.record(
            gateway.id,
            GatewayAction.DEVICE_ATTACHED,
            {"device_id": device.id, "device_uid": device.uid},
        )
        view = await self._with_devices(gateway)
        await self.db.commit()
        logger.info("Device %s attached to gateway %s", device_id, gateway_id)
        return view

    @transactional
    async def detach_device(self, gateway_id: str, device_id: str) -> GatewayWithDevicesResponse:
        gateway = await self._require_gateway(gateway_id, for_update=True)
        device = await self.devices.find_one(for_update=True, id=device_id, gateway_id=gateway.id)
        if not device:
            raise NotFound(f"Device with ID {device_id} not found in gateway {gateway_id}")

        device = await self.devices.update(device, {"gateway_id": None})
        await self.audit.record(
            gateway.id,
            GatewayAction.DEVICE_DETACHED,
            {"device_id": device.id, "device_uid": device.uid},
        )
        view = await self._with_devices(gateway)
        await self.db.commit()
        logger.info("Device %s detached from gateway %s", device_id, gateway_id)
        return view

    @transactional
    async def list_gateway_logs(self, gateway_id: str) -> list[GatewayLogResponse]:
        """Audit trail of one gateway, oldest first."""
        await self._require_gateway(gateway_id)
        entries = await self.audit.history(gateway_id)
        return [GatewayLogResponse.model_validate(e) for e in entries]
