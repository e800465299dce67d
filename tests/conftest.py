"""Shared fixtures: an in-memory SQLite database per test."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import StaticPool

from gdms.database import Base, build_engine
from gdms.models import DeviceType
from gdms.services.devices import DeviceManager
from gdms.services.gateways import GatewayManager


@pytest.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine):
    session_maker = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
async def device_types(db):
    """The default device types, keyed by name."""
    types = [
        DeviceType(name="sensor", description="Environmental or data collection sensors"),
        DeviceType(name="actuator", description="Control devices that perform physical actions"),
        DeviceType(name="controller", description="Logic control and processing devices"),
    ]
    db.add_all(types)
    await db.commit()
    return {t.name: t.id for t in types}


@pytest.fixture
def devices(db):
    return DeviceManager(db)


@pytest.fixture
def gateways(db):
    return GatewayManager(db)


@pytest.fixture
def make_gateway(gateways):
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "serial_number": f"GW-{n:03d}",
            "name": f"Gateway {n}",
            "ipv4_address": f"10.0.0.{n}",
        }
        fields.update(overrides)
        return await gateways.create_gateway(**fields)

    return _make


@pytest.fixture
def make_device(devices, device_types):
    counter = {"uid": 1000}

    async def _make(**overrides):
        counter["uid"] += 1
        fields = {
            "uid": counter["uid"],
            "vendor": "Siemens",
            "device_type_id": device_types["sensor"],
        }
        fields.update(overrides)
        return await devices.add_device(**fields)

    return _make
