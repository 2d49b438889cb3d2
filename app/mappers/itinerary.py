import json
import re
from typing import Any

from pydantic import ValidationError

from app.exceptions.custom import ItineraryParseError
from app.schemas.itinerary import GeneratedItinerary, HotelSummary
from app.schemas.liteapi import BudgetHotel

_JSON_FENCE_RE = re.compile(r"```json\n?")
_FENCE_RE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model may wrap around its JSON."""
    content = text.strip()
    if content.startswith("```json"):
        content = _FENCE_RE.sub("", _JSON_FENCE_RE.sub("", content))
    elif content.startswith("```"):
        content = _FENCE_RE.sub("", content)
    return content


def parse_itinerary(text: str) -> dict[str, Any]:
    """Parse the model output into an itinerary document.

    The document must be a JSON object whose known fields have the expected
    structure. It is returned as parsed, unknown keys included.
    """
    try:
        data = json.loads(strip_code_fences(text))
    except (json.JSONDecodeError, ValueError):
        raise ItineraryParseError(text)

    if not isinstance(data, dict):
        raise ItineraryParseError(text)

    try:
        GeneratedItinerary.model_validate(data)
    except ValidationError:
        raise ItineraryParseError(text)

    return data


def summarize_hotel(hotel: BudgetHotel) -> HotelSummary:
    return HotelSummary(
        id=hotel.hotelId,
        name=hotel.name,
        price=hotel.price,
        address=hotel.address,
        rating=hotel.rating,
    )


def merge_hotel_details(
    chosen: list[dict[str, Any]], hotels: list[BudgetHotel]
) -> list[dict[str, Any]]:
    """Overlay the full search record onto each hotel stub the model picked."""
    merged = []
    for stub in chosen:
        match = next(
            (
                h for h in hotels
                if h.hotelId == stub.get("id") or h.name == stub.get("name")
            ),
            None,
        )
        merged.append({**stub, **match.model_dump()} if match else dict(stub))
    return merged
