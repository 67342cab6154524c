from app.api.delivery_requests import _http_error
from app.core.errors import InvalidTransitionError, RegistryError, ValidationError


SATO = {
    "item": "薬（血圧の薬）",
    "name": "佐藤花子",
    "location": {"latitude": 35.6895, "longitude": 139.6917},
    "priority": "high",
    "phone": "090-1111-2222",
}
YAMADA = {
    "item": "パン 3個",
    "name": "山田次郎",
    "location": {"latitude": 35.6762, "longitude": 139.6503},
    "priority": "medium",
    "phone": "090-3333-4444",
}


async def test_root(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["ok"] is True


async def test_create_returns_waiting_record_in_wire_shape(client):
    r = await client.post("/delivery-requests", json=SATO)
    assert r.status_code == 201
    body = r.json()

    assert set(body) == {
        "id", "item", "name", "location", "timestamp",
        "status", "priority", "deliveryPersonId", "phone",
    }
    assert body["status"] == "waiting"
    assert body["deliveryPersonId"] is None
    assert body["name"] == "佐藤花子"
    assert body["timestamp"].startswith("2026-01-06T09:00:00")


async def test_create_rejects_out_of_range_location(client):
    payload = {**SATO, "location": {"latitude": 95.0, "longitude": 139.6917}}

    r = await client.post("/delivery-requests", json=payload)

    assert r.status_code == 422


async def test_get_round_trip_and_unknown(client):
    created = (await client.post("/delivery-requests", json=SATO)).json()

    r = await client.get(f"/delivery-requests/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created

    r = await client.get("/delivery-requests/missing")
    assert r.status_code == 404


async def test_list_defaults_to_waiting_in_dispatch_order(client):
    await client.post("/delivery-requests", json=YAMADA)
    await client.post("/delivery-requests", json=SATO)

    r = await client.get("/delivery-requests")

    assert r.status_code == 200
    assert [x["name"] for x in r.json()] == ["佐藤花子", "山田次郎"]


async def test_list_rejects_unknown_status(client):
    r = await client.get("/delivery-requests", params={"status": "cancelled"})
    assert r.status_code == 422


async def test_claim_and_complete_flow(client):
    created = (await client.post("/delivery-requests", json=SATO)).json()
    base = f"/delivery-requests/{created['id']}"

    r = await client.post(f"{base}/claim", json={"deliveryPersonId": "delivery_test123"})
    assert r.status_code == 200
    assert r.json()["status"] == "delivering"
    assert r.json()["deliveryPersonId"] == "delivery_test123"

    r = await client.post(f"{base}/claim", json={"deliveryPersonId": "delivery_test456"})
    assert r.status_code == 409

    r = await client.post(f"{base}/complete", json={"deliveryPersonId": "delivery_test456"})
    assert r.status_code == 403

    r = await client.post(f"{base}/complete", json={"deliveryPersonId": "delivery_test123"})
    assert r.status_code == 200
    assert r.json()["status"] == "completed"

    r = await client.get("/delivery-requests", params={"status": "completed"})
    assert [x["id"] for x in r.json()] == [created["id"]]


async def test_claim_unknown_request_is_404(client):
    r = await client.post("/delivery-requests/missing/claim", json={"deliveryPersonId": "d1"})
    assert r.status_code == 404


async def test_claim_requires_deliverer(client):
    created = (await client.post("/delivery-requests", json=SATO)).json()

    r = await client.post(f"/delivery-requests/{created['id']}/claim", json={})

    assert r.status_code == 422


async def test_audit_lists_newest_first(client):
    created = (await client.post("/delivery-requests", json=SATO)).json()
    await client.post(
        f"/delivery-requests/{created['id']}/claim", json={"deliveryPersonId": "delivery_test123"}
    )

    r = await client.get("/admin/audit")

    assert r.status_code == 200
    events = r.json()
    assert [e["type"] for e in events] == ["request.claim", "request.create"]
    assert events[0]["actor"] == {"role": "deliverer", "id": "delivery_test123"}
    assert events[1]["entity"]["id"] == created["id"]


def test_registry_error_subclasses_keep_their_http_status():
    class StaleClaimError(InvalidTransitionError):
        pass

    assert _http_error(StaleClaimError("waiting", "completed")).status_code == 409
    assert _http_error(ValidationError("bad")).status_code == 422
    assert _http_error(RegistryError("boom")).status_code == 500
