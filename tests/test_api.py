"""HTTP adapter tests: routing and domain error to status code mapping."""

import pytest
from httpx import ASGITransport, AsyncClient

from gdms.database import get_db
from gdms.main import app


@pytest.fixture
async def client(db, device_types):
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _create_gateway(client, serial="GW-1", ip="10.0.0.1"):
    resp = await client.post(
        "/gateways", json={"serial_number": serial, "name": "Main", "ipv4_address": ip}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _create_device(client, device_types, uid=42):
    resp = await client.post(
        "/devices", json={"uid": uid, "vendor": "Bosch", "device_type_id": device_types["sensor"]}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}

    resp = await client.get("/health/db")
    assert resp.status_code == 200
    assert resp.json()["database"] == "reachable"


async def test_gateway_lifecycle(client, device_types):
    gw = await _create_gateway(client)
    assert gw["status"] == "active"

    device = await _create_device(client, device_types)
    assert device["status"] == "offline"

    resp = await client.post(f"/gateways/{gw['id']}/devices/{device['id']}")
    assert resp.status_code == 200
    assert resp.json()["devices_count"] == 1

    resp = await client.get(f"/gateways/{gw['id']}")
    assert resp.status_code == 200
    assert [d["id"] for d in resp.json()["devices"]] == [device["id"]]

    resp = await client.get(f"/gateways/{gw['id']}/devices")
    assert [d["id"] for d in resp.json()] == [device["id"]]

    resp = await client.delete(f"/gateways/{gw['id']}/devices/{device['id']}")
    assert resp.status_code == 200
    assert resp.json()["devices"] == []

    resp = await client.get(f"/gateways/{gw['id']}/logs")
    assert [entry["action"] for entry in resp.json()] == ["CREATED", "DEVICE_ATTACHED", "DEVICE_DETACHED"]

    resp = await client.delete(f"/gateways/{gw['id']}")
    assert resp.status_code == 204
    resp = await client.get(f"/gateways/{gw['id']}")
    assert resp.status_code == 404


async def test_conflicts_map_to_409(client, device_types):
    await _create_gateway(client)
    resp = await client.post(
        "/gateways", json={"serial_number": "GW-1", "name": "Dup", "ipv4_address": "10.0.0.2"}
    )
    assert resp.status_code == 409
    assert "serial number" in resp.json()["detail"]

    await _create_device(client, device_types, uid=7)
    resp = await client.post(
        "/devices", json={"uid": 7, "vendor": "ABB", "device_type_id": device_types["sensor"]}
    )
    assert resp.status_code == 409


async def test_not_found_maps_to_404(client, device_types):
    missing = "00000000-0000-4000-8000-000000000000"
    assert (await client.get(f"/gateways/{missing}")).status_code == 404
    assert (await client.get(f"/devices/{missing}")).status_code == 404
    resp = await client.post("/devices", json={"uid": 1, "vendor": "ABB", "device_type_id": 999})
    assert resp.status_code == 404


async def test_patch_gateway(client):
    gw = await _create_gateway(client)
    resp = await client.patch(f"/gateways/{gw['id']}", json={"location": "Dock 4", "status": "inactive"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["location"] == "Dock 4"
    assert body["status"] == "inactive"
    assert body["name"] == "Main"


async def test_patch_gateway_rejects_serial_number(client):
    gw = await _create_gateway(client)
    resp = await client.patch(f"/gateways/{gw['id']}", json={"serial_number": "GW-9"})
    assert resp.status_code == 422


async def test_patch_gateway_null_name_is_400(client):
    gw = await _create_gateway(client)
    resp = await client.patch(f"/gateways/{gw['id']}", json={"name": None})
    assert resp.status_code == 400


async def test_invalid_ipv4_is_rejected(client):
    resp = await client.post(
        "/gateways", json={"serial_number": "GW-1", "name": "Main", "ipv4_address": "300.1.2.3"}
    )
    assert resp.status_code == 422


async def test_malformed_tenant_id_is_rejected(client):
    resp = await client.post(
        "/gateways",
        json={"serial_number": "GW-1", "name": "Main", "ipv4_address": "10.0.0.1", "tenant_id": "acme"},
    )
    assert resp.status_code == 422
    assert (await client.get("/gateways")).json() == []


async def test_device_crud(client, device_types):
    device = await _create_device(client, device_types)
    resp = await client.patch(f"/devices/{device['id']}", json={"status": "online"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "online"
    assert resp.json()["vendor"] == "Bosch"

    resp = await client.get("/devices")
    assert [d["id"] for d in resp.json()] == [device["id"]]

    assert (await client.delete(f"/devices/{device['id']}")).status_code == 204
    assert (await client.get(f"/devices/{device['id']}")).status_code == 404
