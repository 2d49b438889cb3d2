import logging
from typing import Any

import httpx

from app.exceptions.custom import RateLimitError, SupabaseError
from app.schemas.booking import SaveItineraryRequest, UserSession

logger = logging.getLogger(__name__)

HOTEL_BOOKINGS_TABLE = "hotel_bookings"
FLIGHT_BOOKINGS_TABLE = "flight_bookings"
ITINERARIES_TABLE = "itineraries"

HISTORY_COLUMNS = "id,destination,from_city,checkin,checkout,currency,created_at,itinerary"
ITINERARY_COLUMNS = (
    "id,destination,from_city,checkin,checkout,currency,budget,adults,"
    "preferences,form_data,itinerary,hotels,flights"
)

# Never a real password; the sign-in error tells whether the email exists
PROBE_PASSWORD = "dummy_check_password_12345!@#$%_check_only"

_EXISTS_MARKERS = (
    "invalid login credentials",
    "email not confirmed",
    "invalid email or password",
    "incorrect password",
)
_MISSING_MARKERS = ("user not found", "email not found", "no user found")


def hotel_booking_row(user_id: str, booking: dict[str, Any]) -> dict[str, Any]:
    hotel = booking.get("hotel") or {}
    return {
        "user_id": user_id,
        "booking_id": booking["bookingId"],
        "status": booking.get("status") or "CONFIRMED",
        "hotel_confirmation_code": booking.get("hotelConfirmationCode"),
        "checkin": booking.get("checkin"),
        "checkout": booking.get("checkout"),
        "hotel_id": hotel.get("hotelId") or booking.get("hotelId"),
        "hotel_name": hotel.get("name") or "",
        "price": booking.get("price"),
        "currency": booking.get("currency"),
        "cancellation_policies": booking.get("cancellationPolicies"),
        "booking_data": booking,
    }


def flight_booking_row(user_id: str, booking: dict[str, Any]) -> dict[str, Any]:
    return {
        "user_id": user_id,
        "booking_id": booking["bookingId"],
        "flight_id": booking.get("flightId"),
        "status": booking.get("status") or "CONFIRMED",
        "passenger": booking.get("passenger"),
        "flight_data": booking.get("flight"),
        "booking_date": booking.get("bookingDate"),
        "booking_data": booking,
    }


def itinerary_row(user_id: str, request: SaveItineraryRequest) -> dict[str, Any]:
    return {
        "user_id": user_id,
        "destination": request.destination,
        "from_city": request.fromCity or None,
        "checkin": request.checkin or None,
        "checkout": request.checkout or None,
        "currency": request.currency,
        "budget": request.budget,
        "adults": request.adults,
        "preferences": request.preferences or None,
        "itinerary": request.itinerary,
        "hotels": request.hotels,
        "flights": request.flights,
        "form_data": request.formData,
    }


def classify_sign_in_error(message: str) -> bool | None:
    """True/False when the sign-in error reveals whether the email exists."""
    lowered = message.lower()
    if any(marker in lowered for marker in _EXISTS_MARKERS):
        return True
    if any(marker in lowered for marker in _MISSING_MARKERS):
        return False
    return None


class SupabaseService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        service_key: str,
        anon_key: str = "",
    ):
        self._client = client
        self._url = url.rstrip("/")
        self._anon_key = anon_key or service_key
        self._headers = {
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
            "Content-Type": "application/json",
        }

    def _check(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise RateLimitError("Supabase")
        if resp.status_code >= 400:
            raise SupabaseError(_error_message(resp), status_code=resp.status_code)

    async def get_user(self, access_token: str) -> UserSession | None:
        resp = await self._client.get(
            f"{self._url}/auth/v1/user",
            headers={
                "apikey": self._anon_key,
                "Authorization": f"Bearer {access_token}",
            },
        )
        if resp.status_code in (401, 403):
            return None
        self._check(resp)

        data = resp.json()
        if not data.get("id"):
            return None
        return UserSession(
            user_id=data["id"], email=data.get("email"), access_token=access_token
        )

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        resp = await self._client.post(
            f"{self._url}/rest/v1/{table}",
            json=row,
            headers={**self._headers, "Prefer": "return=representation"},
        )
        self._check(resp)

        rows = resp.json()
        logger.info("Inserted row into %s for user %s", table, row.get("user_id"))
        return rows[0] if isinstance(rows, list) and rows else {}

    async def save_hotel_booking(self, user_id: str, booking: dict[str, Any]) -> dict[str, Any]:
        return await self.insert(HOTEL_BOOKINGS_TABLE, hotel_booking_row(user_id, booking))

    async def save_flight_booking(self, user_id: str, booking: dict[str, Any]) -> dict[str, Any]:
        return await self.insert(FLIGHT_BOOKINGS_TABLE, flight_booking_row(user_id, booking))

    async def save_itinerary(
        self, user_id: str, request: SaveItineraryRequest
    ) -> dict[str, Any]:
        return await self.insert(ITINERARIES_TABLE, itinerary_row(user_id, request))

    async def list_itineraries(self, user_id: str) -> list[dict[str, Any]]:
        resp = await self._client.get(
            f"{self._url}/rest/v1/{ITINERARIES_TABLE}",
            params={
                "select": HISTORY_COLUMNS,
                "user_id": f"eq.{user_id}",
                "order": "created_at.desc",
            },
            headers=self._headers,
        )
        self._check(resp)
        return resp.json()

    async def get_itinerary(self, user_id: str, itinerary_id: str) -> dict[str, Any] | None:
        resp = await self._client.get(
            f"{self._url}/rest/v1/{ITINERARIES_TABLE}",
            params={
                "select": ITINERARY_COLUMNS,
                "id": f"eq.{itinerary_id}",
                "user_id": f"eq.{user_id}",
            },
            headers=self._headers,
        )
        self._check(resp)

        rows = resp.json()
        return rows[0] if rows else None

    async def user_exists(self, email: str) -> bool:
        """Probe sign-in with a dummy password. Unknown outcomes count as absent."""
        try:
            resp = await self._client.post(
                f"{self._url}/auth/v1/token",
                params={"grant_type": "password"},
                json={"email": email.strip().lower(), "password": PROBE_PASSWORD},
                headers={"apikey": self._anon_key, "Content-Type": "application/json"},
            )
        except httpx.HTTPError:
            logger.exception("Error checking whether user exists")
            return False

        if resp.status_code < 400:
            return True

        exists = classify_sign_in_error(_error_message(resp))
        return bool(exists)


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if not isinstance(data, dict):
        return resp.text
    for field in ("error_description", "msg", "message", "error"):
        value = data.get(field)
        if isinstance(value, str) and value:
            return value
    return resp.text
