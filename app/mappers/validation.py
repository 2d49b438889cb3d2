import math
import re
from datetime import datetime

from app.exceptions.custom import ApiError
from app.schemas.booking import BookRequest
from app.schemas.itinerary import GenerateItineraryRequest, TripParams

AIRPORT_CODE_RE = re.compile(r"[A-Z]{3}")
SECONDS_PER_DAY = 24 * 60 * 60

MISSING_FIELDS_MSG = "Missing required fields: destination, budget, checkin, checkout"
INVALID_AIRPORT_MSG = "Airport codes must be valid IATA codes (3 letters, e.g., JFK, LAX)."
AIRPORT_PAIR_MSG = (
    "Please provide both origin and destination airports to search for flights."
)


def normalize_airport_code(code: str | None) -> str | None:
    if code is None:
        return None
    normalized = str(code).strip().upper()
    return normalized or None


def validate_airport_pair(
    origin: str | None, destination: str | None
) -> tuple[str | None, str | None]:
    """Normalize both codes; format is checked before the both-or-neither rule."""
    origin = normalize_airport_code(origin)
    destination = normalize_airport_code(destination)

    for code in (origin, destination):
        if code and not AIRPORT_CODE_RE.fullmatch(code):
            raise ApiError(INVALID_AIRPORT_MSG)

    if bool(origin) != bool(destination):
        raise ApiError(AIRPORT_PAIR_MSG)

    return origin, destination


def _parse_date(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ApiError(f"Invalid date: {value}")


def count_nights(checkin: str, checkout: str) -> int:
    """Whole nights between two ISO dates, rounding partial days up."""
    try:
        delta = _parse_date(checkout) - _parse_date(checkin)
    except TypeError:
        # naive vs. timezone-aware timestamps
        raise ApiError("checkin and checkout must use the same date format")
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def require_nights(checkin: str, checkout: str) -> int:
    nights = count_nights(checkin, checkout)
    if nights <= 0:
        raise ApiError("checkout must be after checkin")
    return nights


def parse_budget(value: float | str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ApiError("budget must be a number")


def validate_itinerary_request(request: GenerateItineraryRequest) -> TripParams:
    if not (request.destination and request.budget and request.checkin and request.checkout):
        raise ApiError(MISSING_FIELDS_MSG)

    origin, destination_airport = validate_airport_pair(
        request.originAirport, request.destinationAirport
    )

    return TripParams(
        destination=request.destination,
        place_id=request.placeId or None,
        budget=parse_budget(request.budget),
        currency=request.currency or "USD",
        checkin=request.checkin,
        checkout=request.checkout,
        nights=require_nights(request.checkin, request.checkout),
        adults=request.adults,
        preferences=request.preferences,
        origin_airport=origin,
        destination_airport=destination_airport,
    )


def validate_book_request(request: BookRequest) -> None:
    if not request.prebookId:
        raise ApiError("prebookId is required")
    if not request.transactionId:
        raise ApiError("transactionId is required")
    holder = request.holder
    if not holder or not (holder.firstName and holder.lastName and holder.email):
        raise ApiError("holder information is required")
    if not request.guests:
        raise ApiError("guests information is required")
    for guest in request.guests:
        if not (guest.firstName and guest.lastName and guest.email):
            raise ApiError("guest firstName, lastName and email are required")
