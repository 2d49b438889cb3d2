import json

import httpx
import pytest
import respx
from httpx import Response

from app.exceptions.custom import OpenRouterError, RateLimitError
from app.schemas.itinerary import HotelSummary, ItineraryPrompt, PlaceSummary
from app.services.openrouter import (
    API_URL,
    APP_TITLE,
    MAX_TOKENS,
    TEMPERATURE,
    OpenRouterService,
    build_itinerary_prompt,
)

MODEL = "anthropic/claude-3.5-sonnet"


def _prompt(**overrides) -> ItineraryPrompt:
    data = {
        "destination": "Paris",
        "budget": 1000,
        "currency": "EUR",
        "checkin": "2026-06-01",
        "checkout": "2026-06-04",
        "adults": 2,
        "hotels": [HotelSummary(id="h1", name="Le Petit", price=300, address="3 Rue Cler", rating=4.2)],
        "places": [PlaceSummary(name="Louvre", type="museum", rating=4.7, address="Rue de Rivoli")],
    }
    data.update(overrides)
    return ItineraryPrompt(**data)


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_prompt_lists_hotels_and_places():
    prompt = build_itinerary_prompt(_prompt(), 3)

    assert "3-day itinerary for Paris" in prompt
    assert "Budget: EUR 1000 for 2 person(s)" in prompt
    assert "Dates: 2026-06-01 to 2026-06-04" in prompt
    assert "1. Le Petit - EUR 300/night (Rating: 4.2) - 3 Rue Cler" in prompt
    assert "1. Louvre (museum) - Rating: 4.7 - Rue de Rivoli" in prompt
    assert "Return ONLY valid JSON" in prompt
    assert "Traveler Preferences" not in prompt


def test_prompt_includes_preferences():
    prompt = build_itinerary_prompt(_prompt(preferences="street food, no museums"), 3)

    assert "Traveler Preferences: street food, no museums" in prompt


def test_prompt_keeps_fractional_prices():
    prompt = build_itinerary_prompt(
        _prompt(hotels=[HotelSummary(id="h1", name="Inn", price=99.5)]), 2
    )

    assert "1. Inn - EUR 99.5/night" in prompt


@respx.mock
async def test_generate_itinerary_sends_chat_completion():
    route = respx.post(API_URL).mock(return_value=Response(200, json=_completion('{"summary": "ok"}')))

    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "or-key", MODEL, app_url="https://trips.example")
        text = await service.generate_itinerary(_prompt(), 3)

    assert text == '{"summary": "ok"}'
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer or-key"
    assert request.headers["HTTP-Referer"] == "https://trips.example"
    assert request.headers["X-Title"] == APP_TITLE
    body = json.loads(request.content)
    assert body["model"] == MODEL
    assert body["temperature"] == TEMPERATURE
    assert body["max_tokens"] == MAX_TOKENS
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert "Le Petit" in body["messages"][1]["content"]


@respx.mock
async def test_generate_itinerary_strips_fences():
    respx.post(API_URL).mock(
        return_value=Response(200, json=_completion('```json\n{"summary": "ok"}\n```'))
    )

    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "or-key", MODEL)
        text = await service.generate_itinerary(_prompt(), 3)

    assert json.loads(text) == {"summary": "ok"}


@respx.mock
async def test_generate_itinerary_missing_content():
    respx.post(API_URL).mock(return_value=Response(200, json={"choices": []}))

    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "or-key", MODEL)
        assert await service.generate_itinerary(_prompt(), 3) == ""


async def test_generate_itinerary_without_key():
    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "", MODEL)
        with pytest.raises(OpenRouterError):
            await service.generate_itinerary(_prompt(), 3)


@respx.mock
async def test_generate_itinerary_api_error():
    respx.post(API_URL).mock(return_value=Response(402, text="Insufficient credits"))

    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "or-key", MODEL)
        with pytest.raises(OpenRouterError) as exc_info:
            await service.generate_itinerary(_prompt(), 3)

    assert exc_info.value.status_code == 402
    assert "402 Insufficient credits" in exc_info.value.message


@respx.mock
async def test_generate_itinerary_transport_error():
    respx.post(API_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "or-key", MODEL)
        with pytest.raises(OpenRouterError):
            await service.generate_itinerary(_prompt(), 3)


@respx.mock
async def test_generate_itinerary_rate_limit():
    respx.post(API_URL).mock(return_value=Response(429))

    async with httpx.AsyncClient() as client:
        service = OpenRouterService(client, "or-key", MODEL)
        with pytest.raises(RateLimitError):
            await service.generate_itinerary(_prompt(), 3)
