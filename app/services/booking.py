import asyncio
import logging

from app.exceptions.custom import ApiError, LiteAPIError
from app.idempotency import IdempotencyStore, booking_key
from app.mappers.validation import validate_book_request
from app.schemas.booking import BookRequest
from app.services.liteapi import LiteAPIService

logger = logging.getLogger(__name__)

RETRY_ATTEMPTS = 3
RETRY_DELAY = 2.0  # seconds


class BookingService:
    """Prebook and finalize hotel bookings through LiteAPI."""

    def __init__(
        self,
        liteapi: LiteAPIService,
        store: IdempotencyStore,
        retry_attempts: int = RETRY_ATTEMPTS,
        retry_delay: float = RETRY_DELAY,
    ):
        self._liteapi = liteapi
        self._store = store
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay

    async def prebook(self, offer_id: str | None) -> dict:
        if not offer_id:
            raise ApiError("offerId required")
        return await self._liteapi.prebook(offer_id)

    async def book(self, request: BookRequest) -> dict:
        """Finalize a prebooked offer once per (prebook, transaction) pair.

        A repeat of a finished booking returns the stored confirmation
        without calling the provider.
        """
        validate_book_request(request)

        key = booking_key(request.prebookId, request.transactionId)
        existing = self._store.begin(key)
        if existing is not None:
            logger.info("Booking for prebook %s already completed", request.prebookId)
            return existing.result

        try:
            result = await self._book_with_retry(request)
        except Exception:
            self._store.release(key)
            raise

        self._store.complete(key, result)
        return result

    async def _book_with_retry(self, request: BookRequest) -> dict:
        attempt = 0
        while True:
            try:
                return await self._liteapi.book(request)
            except LiteAPIError as exc:
                if exc.is_fraud_check or not exc.is_payment_pending:
                    raise
                if attempt >= self._retry_attempts:
                    logger.warning(
                        "Payment still pending for prebook %s after %d retries",
                        request.prebookId, self._retry_attempts,
                    )
                    raise
                attempt += 1
                logger.info(
                    "Payment still processing for prebook %s, retrying in %.0fs (attempt %d/%d)",
                    request.prebookId, self._retry_delay, attempt, self._retry_attempts,
                )
                await asyncio.sleep(self._retry_delay)
