import json

import httpx
import pytest
import respx
from httpx import Response

from app.exceptions.custom import LiteAPIError, RateLimitError
from app.schemas.booking import BookRequest, Guest, Holder
from app.services.liteapi import (
    BOOK_URL,
    HOTEL_URL,
    PLACES_URL,
    PREBOOK_URL,
    RATES_URL,
    LiteAPIService,
    build_rates_body,
)


def _book_request() -> BookRequest:
    return BookRequest(
        prebookId="pb-1",
        transactionId="tx-1",
        holder=Holder(firstName="Ada", lastName="Lovelace", email="ada@example.com"),
        guests=[Guest(firstName="Ada", lastName="Lovelace", email="ada@example.com")],
    )


def test_rates_body_defaults():
    body = build_rates_body({"checkin": "2026-06-01", "checkout": "2026-06-04", "adults": 2})

    assert body["occupancies"] == [{"adults": 2}]
    assert body["currency"] == "USD"
    assert body["guestNationality"] == "US"
    assert body["maxRatesPerHotel"] == 1
    assert body["roomMapping"] is True
    assert body["includeHotelData"] is True


def test_rates_body_ai_search_wins():
    body = build_rates_body({"aiSearch": "hotels in Paris", "placeId": "pid", "hotelIds": ["h1"]})

    assert body["aiSearch"] == "hotels in Paris"
    assert "placeId" not in body
    assert "hotelIds" not in body


def test_rates_body_place_then_hotel_ids():
    assert build_rates_body({"placeId": "pid", "hotelIds": ["h1"]})["placeId"] == "pid"
    assert build_rates_body({"hotelIds": ["h1"]})["hotelIds"] == ["h1"]


@respx.mock
async def test_search_places_success():
    route = respx.get(PLACES_URL).mock(
        return_value=Response(
            200,
            json={"data": [{"placeId": "ChIJ", "displayName": "Paris", "formattedAddress": "Paris, France", "types": ["locality"]}]},
        )
    )

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        result = await service.search_places("Paris")

    assert result.data[0].placeId == "ChIJ"
    assert result.data[0].displayName == "Paris"
    request = route.calls.last.request
    assert request.url.params["textQuery"] == "Paris"
    assert request.headers["X-API-Key"] == "lite-key"


@respx.mock
async def test_search_rates_posts_body():
    route = respx.post(RATES_URL).mock(return_value=Response(200, json={"data": [], "hotels": []}))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        result = await service.search_rates({"placeId": "pid", "adults": 1})

    assert result == {"data": [], "hotels": []}
    sent = json.loads(route.calls.last.request.content)
    assert sent["placeId"] == "pid"
    assert sent["occupancies"] == [{"adults": 1}]


@respx.mock
async def test_get_hotel_details():
    route = respx.get(HOTEL_URL).mock(return_value=Response(200, json={"data": {"id": "lp1"}}))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        result = await service.get_hotel_details("lp1")

    assert result == {"data": {"id": "lp1"}}
    assert route.calls.last.request.url.params["hotelId"] == "lp1"


@respx.mock
async def test_prebook_uses_payment_sdk():
    route = respx.post(PREBOOK_URL).mock(
        return_value=Response(200, json={"data": {"prebookId": "pb-1", "secretKey": "sk"}})
    )

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        result = await service.prebook("offer-1")

    assert result["data"]["prebookId"] == "pb-1"
    assert json.loads(route.calls.last.request.content) == {"usePaymentSdk": True, "offerId": "offer-1"}


@respx.mock
async def test_book_sends_transaction_payment():
    route = respx.post(BOOK_URL).mock(return_value=Response(200, json={"data": {"bookingId": "b-1"}}))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        result = await service.book(_book_request())

    assert result["data"]["bookingId"] == "b-1"
    sent = json.loads(route.calls.last.request.content)
    assert sent["prebookId"] == "pb-1"
    assert sent["payment"] == {"method": "TRANSACTION_ID", "transactionId": "tx-1"}
    assert sent["guests"][0]["occupancyNumber"] == 1
    assert sent["holder"]["email"] == "ada@example.com"


@respx.mock
async def test_book_error_carries_provider_code():
    payload = {"error": {"code": 2013, "message": "Booking failed due to fraud check", "description": "declined"}}
    respx.post(BOOK_URL).mock(return_value=Response(400, json=payload))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        with pytest.raises(LiteAPIError) as exc_info:
            await service.book(_book_request())

    error = exc_info.value
    assert error.code == 2013
    assert error.message == "Booking failed due to fraud check"
    assert error.description == "declined"
    assert error.details == payload
    assert error.is_fraud_check
    assert not error.is_payment_pending


@respx.mock
async def test_book_error_without_json_body():
    respx.post(BOOK_URL).mock(return_value=Response(502, text="Bad Gateway"))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        with pytest.raises(LiteAPIError) as exc_info:
            await service.book(_book_request())

    assert exc_info.value.message == "Bad Gateway"
    assert exc_info.value.status_code == 502
    assert exc_info.value.code is None


@respx.mock
async def test_book_invalid_json_success_body():
    respx.post(BOOK_URL).mock(return_value=Response(200, text="<html>ok</html>"))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        with pytest.raises(LiteAPIError) as exc_info:
            await service.book(_book_request())

    assert exc_info.value.message == "Invalid response from LiteAPI"


@respx.mock
async def test_rate_limit():
    respx.get(PLACES_URL).mock(return_value=Response(429, text="slow down"))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        with pytest.raises(RateLimitError):
            await service.search_places("Paris")


def test_payment_pending_detected_by_message():
    error = LiteAPIError("Payment not completed yet")
    assert error.is_payment_pending
    assert LiteAPIError("x", code=2014).is_payment_pending


@respx.mock
async def test_search_places_rejects_place_without_id():
    respx.get(PLACES_URL).mock(return_value=Response(200, json={"data": [{"displayName": "Paris"}]}))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        with pytest.raises(LiteAPIError) as exc_info:
            await service.search_places("Paris")

    assert exc_info.value.message == "Invalid response from LiteAPI"


@respx.mock
async def test_search_rates_invalid_json_body():
    respx.post(RATES_URL).mock(return_value=Response(200, text="<html>maintenance</html>"))

    async with httpx.AsyncClient() as client:
        service = LiteAPIService(client, "lite-key")
        with pytest.raises(LiteAPIError) as exc_info:
            await service.search_rates({"aiSearch": "hotels in Paris"})

    assert exc_info.value.message == "Invalid response from LiteAPI"
