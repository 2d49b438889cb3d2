import json
import logging

import httpx

from app.exceptions.custom import LiteAPIError, RateLimitError
from app.schemas.booking import BookRequest
from app.schemas.liteapi import PlacesResponse

logger = logging.getLogger(__name__)

API_BASE = "https://api.liteapi.travel/v3.0"
BOOK_BASE = "https://book.liteapi.travel/v3.0"

PLACES_URL = f"{API_BASE}/data/places"
HOTEL_URL = f"{API_BASE}/data/hotel"
RATES_URL = f"{API_BASE}/hotels/rates"
PREBOOK_URL = f"{BOOK_BASE}/rates/prebook"
BOOK_URL = f"{BOOK_BASE}/rates/book"

DEFAULT_GUEST_NATIONALITY = "US"


def build_rates_body(params: dict) -> dict:
    """Translate search parameters into the rates endpoint's request body."""
    body: dict = {
        "occupancies": [{"adults": params.get("adults", 1)}],
        "currency": params.get("currency") or "USD",
        "guestNationality": params.get("guestNationality") or DEFAULT_GUEST_NATIONALITY,
        "checkin": params.get("checkin"),
        "checkout": params.get("checkout"),
        "roomMapping": params.get("roomMapping", True),
        "maxRatesPerHotel": params.get("maxRatesPerHotel", 1),
        "includeHotelData": params.get("includeHotelData", True),
    }
    if params.get("aiSearch"):
        body["aiSearch"] = params["aiSearch"]
    elif params.get("placeId"):
        body["placeId"] = params["placeId"]
    elif params.get("hotelIds"):
        body["hotelIds"] = params["hotelIds"]
    return body


def _error_from_response(resp: httpx.Response, default: str) -> LiteAPIError:
    try:
        payload = resp.json()
    except ValueError:
        payload = {"message": resp.text or default}

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        error = {}
    message = error.get("message") or (
        payload.get("message") if isinstance(payload, dict) else None
    ) or default

    return LiteAPIError(
        message,
        status_code=resp.status_code,
        code=error.get("code"),
        description=error.get("description"),
        details=payload,
    )


class LiteAPIService:
    def __init__(self, client: httpx.AsyncClient, api_key: str):
        self._client = client
        self._headers = {
            "X-API-Key": api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

    def _check(self, resp: httpx.Response, default: str) -> None:
        if resp.status_code == 429:
            raise RateLimitError("LiteAPI")
        if resp.status_code >= 400:
            raise _error_from_response(resp, default)

    def _json(self, resp: httpx.Response):
        try:
            return resp.json()
        except json.JSONDecodeError:
            raise LiteAPIError("Invalid response from LiteAPI", status_code=resp.status_code)

    async def search_places(self, query: str) -> PlacesResponse:
        resp = await self._client.get(
            PLACES_URL, params={"textQuery": query}, headers=self._headers
        )
        self._check(resp, "Failed to search places")
        try:
            return PlacesResponse(**resp.json())
        except (ValueError, TypeError):
            raise LiteAPIError("Invalid response from LiteAPI", status_code=resp.status_code)

    async def search_rates(self, params: dict) -> dict:
        resp = await self._client.post(
            RATES_URL, json=build_rates_body(params), headers=self._headers
        )
        self._check(resp, "Failed to search rates")
        return self._json(resp)

    async def get_hotel_details(self, hotel_id: str) -> dict:
        resp = await self._client.get(
            HOTEL_URL,
            params={"hotelId": hotel_id, "timeout": 4},
            headers=self._headers,
        )
        self._check(resp, "Failed to get hotel details")
        return self._json(resp)

    async def prebook(self, offer_id: str) -> dict:
        resp = await self._client.post(
            PREBOOK_URL,
            json={"usePaymentSdk": True, "offerId": offer_id},
            headers=self._headers,
        )
        self._check(resp, "Failed to prebook")
        logger.info("Prebooked offer %s", offer_id)
        return self._json(resp)

    async def book(self, request: BookRequest) -> dict:
        payload = {
            "prebookId": request.prebookId,
            "holder": request.holder.model_dump(),
            "payment": {
                "method": "TRANSACTION_ID",
                "transactionId": request.transactionId,
            },
            "guests": [guest.model_dump() for guest in request.guests or []],
        }
        logger.info("Booking prebook %s", request.prebookId)

        resp = await self._client.post(BOOK_URL, json=payload, headers=self._headers)
        logger.debug("LiteAPI book response %s: %s", resp.status_code, resp.text)
        self._check(resp, "Failed to book")
        return self._json(resp)
