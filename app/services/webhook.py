import hmac
import logging
from typing import Any, Awaitable, Callable

from app.exceptions.custom import ApiError
from app.schemas.webhook import WebhookEvent

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any], dict[str, Any]], Awaitable[None]]


async def handle_booking_confirmed(response: dict[str, Any], _request: dict[str, Any]) -> None:
    logger.info(
        "Booking confirmed: booking_id=%s status=%s confirmation=%s",
        response.get("bookingId"),
        response.get("status"),
        response.get("hotelConfirmationCode"),
    )


async def handle_booking_cancelled(response: dict[str, Any], _request: dict[str, Any]) -> None:
    logger.info(
        "Booking cancelled: booking_id=%s reason=%s",
        response.get("bookingId"),
        response.get("reason"),
    )


async def handle_payment_accepted(response: dict[str, Any], _request: dict[str, Any]) -> None:
    logger.info(
        "Payment accepted: transaction_id=%s amount=%s %s",
        response.get("transactionId"),
        response.get("amount"),
        response.get("currency"),
    )


async def handle_payment_declined(response: dict[str, Any], _request: dict[str, Any]) -> None:
    logger.info(
        "Payment declined: transaction_id=%s reason=%s",
        response.get("transactionId"),
        response.get("reason"),
    )


async def handle_payment_balance(response: dict[str, Any], _request: dict[str, Any]) -> None:
    logger.info("Payment balance update: %s", response)


HANDLERS: dict[str, Handler] = {
    "booking.book": handle_booking_confirmed,
    "booking.cancel": handle_booking_cancelled,
    "payment.accepted": handle_payment_accepted,
    "payment.declined": handle_payment_declined,
    "payment.balance": handle_payment_balance,
}


class WebhookService:
    """Receives LiteAPI lifecycle events. Handlers only log; nothing is stored."""

    def __init__(self, token: str = ""):
        self._token = token

    def verify(self, presented: str | None) -> None:
        if not self._token:
            return
        if presented is None or not hmac.compare_digest(presented.encode(), self._token.encode()):
            raise ApiError("Unauthorized", status_code=401)

    async def dispatch(self, event: WebhookEvent, token: str | None = None) -> str:
        if event.response is None or event.request is None or not event.eventName:
            raise ApiError("Missing required fields")
        self.verify(token)

        handler = HANDLERS.get(event.eventName)
        if handler is None:
            logger.info("Unhandled webhook event: %s", event.eventName)
        else:
            await handler(event.response, event.request)
        return event.eventName
