import logging

import httpx
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .custom import (
    FRAUD_CHECK_CODE,
    PAYMENT_PENDING_CODE,
    AmadeusError,
    ApiError,
    BookingInProgressError,
    ItineraryParseError,
    LiteAPIError,
    OpenRouterError,
    RateLimitError,
    SupabaseError,
)

logger = logging.getLogger(__name__)


async def api_error_handler(
    _request: Request, exc: ApiError
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def liteapi_error_handler(_request: Request, exc: LiteAPIError) -> JSONResponse:
    logger.error(
        "LiteAPI error: %s (status=%s, code=%s)", exc.message, exc.status_code, exc.code
    )
    if exc.is_fraud_check:
        return JSONResponse(
            status_code=403,
            content={
                "error": (
                    "Booking was rejected by fraud check. This is common in sandbox "
                    "mode. Please try again with different guest information or "
                    "contact LiteAPI support."
                ),
                "code": FRAUD_CHECK_CODE,
                "type": "fraud_check",
            },
        )
    if exc.is_payment_pending:
        return JSONResponse(
            status_code=400,
            content={
                "error": (
                    "Payment is still processing. Please wait a moment and the "
                    "booking will complete automatically. If this persists, "
                    "please try again."
                ),
                "code": PAYMENT_PENDING_CODE,
                "type": "payment_pending",
                "retry": True,
            },
        )
    return JSONResponse(
        status_code=500,
        content={"error": exc.message, "code": exc.code, "details": exc.details},
    )


async def amadeus_error_handler(_request: Request, exc: AmadeusError) -> JSONResponse:
    logger.error("Amadeus error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(status_code=500, content={"error": exc.message})


async def openrouter_error_handler(_request: Request, exc: OpenRouterError) -> JSONResponse:
    logger.error("OpenRouter error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(status_code=500, content={"error": exc.message})


async def supabase_error_handler(_request: Request, exc: SupabaseError) -> JSONResponse:
    logger.error("Supabase error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(status_code=500, content={"error": exc.message})


async def itinerary_parse_error_handler(
    _request: Request, exc: ItineraryParseError
) -> JSONResponse:
    logger.error("Failed to parse itinerary JSON. Raw response: %s", exc.raw_text)
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to parse AI response. Please try again."},
    )


async def booking_in_progress_error_handler(
    _request: Request, exc: BookingInProgressError
) -> JSONResponse:
    logger.warning("Duplicate booking finalize rejected: %s", exc.key)
    return JSONResponse(status_code=409, content={"error": "Booking already in progress"})


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded for {exc.service}"},
    )


async def upstream_http_error_handler(_request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.error("Upstream request failed: %s: %s", type(exc).__name__, exc)
    return JSONResponse(
        status_code=500,
        content={"error": f"Upstream request failed: {type(exc).__name__}"},
    )


async def payload_validation_error_handler(
    _request: Request, exc: ValidationError
) -> JSONResponse:
    logger.error("Unexpected upstream payload: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Unexpected response from provider"})


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})
