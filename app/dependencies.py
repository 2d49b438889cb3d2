from typing import Annotated

from fastapi import Depends, Request

from app.exceptions.custom import ApiError
from app.schemas.booking import UserSession
from app.services.amadeus import AmadeusService
from app.services.booking import BookingService
from app.services.google_places import GooglePlacesService
from app.services.itinerary import ItineraryService
from app.services.liteapi import LiteAPIService
from app.services.supabase import SupabaseService
from app.services.webhook import WebhookService


def get_liteapi_service(request: Request) -> LiteAPIService:
    return request.app.state.liteapi_service


def get_amadeus_service(request: Request) -> AmadeusService:
    return request.app.state.amadeus_service


def get_google_places_service(request: Request) -> GooglePlacesService:
    return request.app.state.google_places_service


def get_itinerary_service(request: Request) -> ItineraryService:
    return request.app.state.itinerary_service


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_webhook_service(request: Request) -> WebhookService:
    return request.app.state.webhook_service


def get_supabase_service(request: Request) -> SupabaseService | None:
    return getattr(request.app.state, "supabase_service", None)


LiteAPIDep = Annotated[LiteAPIService, Depends(get_liteapi_service)]
AmadeusDep = Annotated[AmadeusService, Depends(get_amadeus_service)]
GooglePlacesDep = Annotated[GooglePlacesService, Depends(get_google_places_service)]
ItineraryDep = Annotated[ItineraryService, Depends(get_itinerary_service)]
BookingDep = Annotated[BookingService, Depends(get_booking_service)]
WebhookDep = Annotated[WebhookService, Depends(get_webhook_service)]
SupabaseDep = Annotated[SupabaseService | None, Depends(get_supabase_service)]


def require_supabase(supabase: SupabaseDep) -> SupabaseService:
    if supabase is None:
        raise ApiError("Supabase configuration missing", status_code=503)
    return supabase


RequiredSupabaseDep = Annotated[SupabaseService, Depends(require_supabase)]


async def get_current_user(
    request: Request, supabase: RequiredSupabaseDep
) -> UserSession:
    """Resolve the caller's Supabase session from the bearer token."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise ApiError("Authentication required", status_code=401)

    user = await supabase.get_user(token)
    if user is None:
        raise ApiError("Authentication required", status_code=401)
    return user


CurrentUserDep = Annotated[UserSession, Depends(get_current_user)]
