import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.config import Settings
from app.exceptions.custom import (
    AmadeusError,
    ApiError,
    BookingInProgressError,
    ItineraryParseError,
    LiteAPIError,
    OpenRouterError,
    RateLimitError,
    SupabaseError,
)
from app.exceptions.handlers import (
    amadeus_error_handler,
    api_error_handler,
    booking_in_progress_error_handler,
    itinerary_parse_error_handler,
    liteapi_error_handler,
    openrouter_error_handler,
    payload_validation_error_handler,
    rate_limit_error_handler,
    request_validation_error_handler,
    supabase_error_handler,
    unhandled_error_handler,
    upstream_http_error_handler,
)
from app.idempotency import IdempotencyStore
from app.routers.bookings import router as bookings_router
from app.routers.flights import router as flights_router
from app.routers.hotels import router as hotels_router
from app.routers.itinerary import router as itinerary_router
from app.routers.places import router as places_router
from app.routers.webhook import router as webhook_router
from app.services.amadeus import AmadeusService
from app.services.booking import BookingService
from app.services.google_places import GooglePlacesService
from app.services.hotel_search import HotelBudgetService
from app.services.itinerary import ItineraryService
from app.services.liteapi import LiteAPIService
from app.services.openrouter import OpenRouterService
from app.services.supabase import SupabaseService
from app.services.webhook import WebhookService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=30.0) as client:
        liteapi = LiteAPIService(client, settings.liteapi_api_key)
        amadeus = AmadeusService(
            client,
            settings.amadeus_api_key,
            settings.amadeus_api_secret,
            base_url=settings.amadeus_base_url,
        )
        google_places = GooglePlacesService(client, settings.google_places_api_key)
        openrouter = OpenRouterService(
            client,
            settings.openrouter_api_key,
            settings.openrouter_model,
            app_url=settings.app_url,
        )

        app.state.liteapi_service = liteapi
        app.state.amadeus_service = amadeus
        app.state.google_places_service = google_places
        app.state.itinerary_service = ItineraryService(
            liteapi,
            HotelBudgetService(liteapi),
            google_places,
            amadeus,
            openrouter,
        )
        app.state.booking_service = BookingService(
            liteapi,
            IdempotencyStore(),
            retry_attempts=settings.book_retry_attempts,
            retry_delay=settings.book_retry_delay,
        )
        app.state.webhook_service = WebhookService(settings.liteapi_webhook_token)

        # Supabase is optional; persistence endpoints answer 503 without it
        if settings.supabase_url and settings.supabase_service_key:
            app.state.supabase_service = SupabaseService(
                client,
                settings.supabase_url,
                settings.supabase_service_key,
                anon_key=settings.supabase_anon_key,
            )
        else:
            app.state.supabase_service = None

        yield


app = FastAPI(title="Trip Planner", lifespan=lifespan)

app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_exception_handler(LiteAPIError, liteapi_error_handler)
app.add_exception_handler(AmadeusError, amadeus_error_handler)
app.add_exception_handler(OpenRouterError, openrouter_error_handler)
app.add_exception_handler(SupabaseError, supabase_error_handler)
app.add_exception_handler(ItineraryParseError, itinerary_parse_error_handler)
app.add_exception_handler(BookingInProgressError, booking_in_progress_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)
app.add_exception_handler(httpx.HTTPError, upstream_http_error_handler)
app.add_exception_handler(ValidationError, payload_validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(itinerary_router)
app.include_router(hotels_router)
app.include_router(places_router)
app.include_router(flights_router)
app.include_router(bookings_router)
app.include_router(webhook_router)
