#!/usr/bin/env python3
"""
Seed script: creates demo tenants, gateways and devices, and attaches devices to gateways.
Run after migrations (which create the device types): python scripts/seed.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from gdms.database import async_session_maker
from gdms.errors import Conflict
from gdms.models import DeviceStatus, DeviceType, Gateway, GatewayStatus, PeripheralDevice, Tenant
from gdms.services.devices import DeviceManager
from gdms.services.gateways import GatewayManager

TENANTS = [
    {"name": "Acme Corporation", "contact_email": "admin@acme.com"},
    {"name": "Tech Solutions Ltd", "contact_email": "contact@techsolutions.com"},
]

# (serial, name, ip, status, location, tenant index)
GATEWAYS = [
    ("GW-001-ABC123", "Main Building Gateway", "192.168.1.100", GatewayStatus.active,
     "Building A, Floor 1, Server Room", 0),
    ("GW-002-DEF456", "Factory Floor Gateway", "192.168.2.100", GatewayStatus.active,
     "Factory Floor, Section B", 0),
    ("GW-003-GHI789", "Warehouse Gateway", "192.168.3.100", GatewayStatus.inactive,
     "Warehouse, Zone A", 1),
]

# (uid, vendor, status, device type name, gateway index or None)
DEVICES = [
    (1001, "Siemens", DeviceStatus.online, "sensor", 0),
    (1002, "Honeywell", DeviceStatus.online, "actuator", 0),
    (1003, "ABB", DeviceStatus.offline, "controller", 0),
    (2001, "Schneider Electric", DeviceStatus.online, "sensor", 1),
    (2002, "Rockwell", DeviceStatus.maintenance, "display", 1),
    (3001, "Bosch", DeviceStatus.offline, "communication", None),
]


async def seed():
    async with async_session_maker() as session:
        result = await session.execute(select(DeviceType))
        types = {t.name: t.id for t in result.scalars().all()}
        if not types:
            print("Device types not found. Run `alembic upgrade head` first.")
            return

        tenant_ids = []
        for data in TENANTS:
            result = await session.execute(select(Tenant).where(Tenant.name == data["name"]))
            tenant = result.scalar_one_or_none()
            if not tenant:
                tenant = Tenant(**data)
                session.add(tenant)
                await session.flush()
            tenant_ids.append(tenant.id)
        await session.commit()

        gateways = GatewayManager(session)
        devices = DeviceManager(session)

        gateway_ids = []
        for serial, name, ip, status, location, tenant_idx in GATEWAYS:
            try:
                gw = await gateways.create_gateway(
                    serial_number=serial,
                    name=name,
                    ipv4_address=ip,
                    status=status,
                    location=location,
                    tenant_id=tenant_ids[tenant_idx],
                )
                gateway_ids.append(gw.id)
            except Conflict:
                print(f"Gateway {serial} already exists, skipping.")
                result = await session.execute(select(Gateway.id).where(Gateway.serial_number == serial))
                gateway_ids.append(str(result.scalar_one()))

        for uid, vendor, status, type_name, gateway_idx in DEVICES:
            try:
                device = await devices.add_device(
                    uid=uid, vendor=vendor, device_type_id=types[type_name], status=status
                )
            except Conflict:
                print(f"Device {uid} already exists, skipping.")
                continue
            if gateway_idx is not None:
                await gateways.attach_device(gateway_ids[gateway_idx], device.id)

        result = await session.execute(select(PeripheralDevice))
        print(f"Seed complete! {len(gateway_ids)} gateways, {len(result.scalars().all())} devices.")
        print("Example: curl http://localhost:8000/gateways")


if __name__ == "__main__":
    asyncio.run(seed())
