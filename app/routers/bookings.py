from fastapi import APIRouter

from app.dependencies import CurrentUserDep, RequiredSupabaseDep, SupabaseDep
from app.exceptions.custom import ApiError
from app.schemas.booking import CheckUserRequest, SaveBookingRequest, SaveItineraryRequest
from app.schemas.responses import SavedRecordResponse, SavedRecordsResponse, UserExistsResponse

router = APIRouter(prefix="/api")


def _require_booking_data(request: SaveBookingRequest) -> dict:
    if not request.bookingData or not request.bookingData.get("bookingId"):
        raise ApiError("Booking data is required")
    return request.bookingData


@router.post("/bookings/hotel", response_model=SavedRecordResponse)
async def save_hotel_booking(
    request: SaveBookingRequest,
    user: CurrentUserDep,
    supabase: RequiredSupabaseDep,
) -> SavedRecordResponse:
    booking = _require_booking_data(request)
    row = await supabase.save_hotel_booking(user.user_id, booking)
    return SavedRecordResponse(data=row)


@router.post("/bookings/flight", response_model=SavedRecordResponse)
async def save_flight_booking(
    request: SaveBookingRequest,
    user: CurrentUserDep,
    supabase: RequiredSupabaseDep,
) -> SavedRecordResponse:
    booking = _require_booking_data(request)
    row = await supabase.save_flight_booking(user.user_id, booking)
    return SavedRecordResponse(data=row)


@router.post("/itineraries", response_model=SavedRecordResponse)
async def save_itinerary(
    request: SaveItineraryRequest,
    user: CurrentUserDep,
    supabase: RequiredSupabaseDep,
) -> SavedRecordResponse:
    row = await supabase.save_itinerary(user.user_id, request)
    return SavedRecordResponse(data=row)


@router.get("/itineraries", response_model=SavedRecordsResponse)
async def list_itineraries(
    user: CurrentUserDep, supabase: RequiredSupabaseDep
) -> SavedRecordsResponse:
    return SavedRecordsResponse(data=await supabase.list_itineraries(user.user_id))


@router.get("/itineraries/{itinerary_id}", response_model=SavedRecordResponse)
async def get_itinerary(
    itinerary_id: str, user: CurrentUserDep, supabase: RequiredSupabaseDep
) -> SavedRecordResponse:
    row = await supabase.get_itinerary(user.user_id, itinerary_id)
    if row is None:
        raise ApiError("Itinerary not found", status_code=404)
    return SavedRecordResponse(data=row)


@router.post("/check-user-exists", response_model=UserExistsResponse)
async def check_user_exists(
    request: CheckUserRequest, supabase: SupabaseDep
) -> UserExistsResponse:
    if not request.email:
        raise ApiError("Email is required")
    if supabase is None:
        raise ApiError("Supabase configuration missing", status_code=503)
    return UserExistsResponse(exists=await supabase.user_exists(request.email))
