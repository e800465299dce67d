"""FastAPI dependencies wiring sessions to the managers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gdms.database import get_db
from gdms.services.devices import DeviceManager
from gdms.services.gateways import GatewayManager


def get_device_manager(db: Annotated[AsyncSession, Depends(get_db)]) -> DeviceManager:
    return DeviceManager(db)


def get_gateway_manager(db: Annotated[AsyncSession, Depends(get_db)]) -> GatewayManager:
    return GatewayManager(db)


DeviceManagerDep = Annotated[DeviceManager, Depends(get_device_manager)]
GatewayManagerDep = Annotated[GatewayManager, Depends(get_gateway_manager)]
