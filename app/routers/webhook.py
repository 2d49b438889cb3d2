from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import ValidationError

from app.dependencies import WebhookDep
from app.exceptions.custom import ApiError
from app.schemas.responses import WebhookAck
from app.schemas.webhook import WebhookEvent

router = APIRouter(prefix="/api/webhook")


@router.post("", response_model=WebhookAck)
async def receive_webhook(request: Request, service: WebhookDep) -> WebhookAck:
    try:
        body = await request.json()
        event = WebhookEvent.model_validate(body)
    except (ValueError, ValidationError):
        raise ApiError("Invalid webhook body")

    event_name = await service.dispatch(event, request.headers.get("x-webhook-token"))
    return WebhookAck(event=event_name)


@router.get("")
async def webhook_status() -> dict:
    return {
        "status": "ok",
        "message": "Webhook endpoint is active",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
