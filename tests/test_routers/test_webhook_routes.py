from app.services.webhook import WebhookService

EVENT = {
    "eventName": "booking.book",
    "response": {"bookingId": "b-1", "status": "CONFIRMED"},
    "request": {"prebookId": "pb-1"},
}


async def test_webhook_ack(client):
    resp = await client.post("/api/webhook", json=EVENT)

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "received": True, "event": "booking.book"}


async def test_webhook_unknown_event_ack(client):
    resp = await client.post("/api/webhook", json={**EVENT, "eventName": "hotel.updated"})

    assert resp.status_code == 200
    assert resp.json()["event"] == "hotel.updated"


async def test_webhook_missing_fields(client):
    resp = await client.post("/api/webhook", json={"eventName": "booking.book", "response": {}})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields"}


async def test_webhook_invalid_json(client):
    resp = await client.post(
        "/api/webhook", content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid webhook body"}


async def test_webhook_token_checked_when_configured(client):
    from app.main import app

    app.state.webhook_service = WebhookService("secret")

    denied = await client.post("/api/webhook", json=EVENT, headers={"x-webhook-token": "nope"})
    allowed = await client.post("/api/webhook", json=EVENT, headers={"x-webhook-token": "secret"})

    assert denied.status_code == 401
    assert denied.json() == {"error": "Unauthorized"}
    assert allowed.status_code == 200


async def test_webhook_status(client):
    resp = await client.get("/api/webhook")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["message"] == "Webhook endpoint is active"
    assert "timestamp" in data
