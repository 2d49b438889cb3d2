import logging

import httpx

from app.exceptions.custom import OpenRouterError, RateLimitError
from app.mappers.itinerary import strip_code_fences
from app.schemas.itinerary import ItineraryPrompt

logger = logging.getLogger(__name__)

API_URL = "https://openrouter.ai/api/v1/chat/completions"
APP_TITLE = "Smart Trip Planner"
TEMPERATURE = 0.7
MAX_TOKENS = 4000

_SYSTEM_PROMPT = (
    "You are an expert travel planner specializing in creating authentic, "
    "localized, and budget-conscious itineraries. Always respond with valid JSON only."
)

_INSTRUCTIONS = """Create a detailed day-by-day itinerary that:
1. Is culturally authentic and localized (suggest local experiences, foods, customs)
2. Includes 3-5 hotel recommendations that fit the budget
3. Organizes activities by day with realistic timing
4. Includes local restaurants, markets, and cultural sites
5. Suggests transportation between locations
6. Includes budget breakdown per day
7. Provides local tips and cultural insights"""

_RESPONSE_SHAPE = """Format the response as a structured JSON with this format:
{
  "summary": "Brief overview of the trip",
  "hotels": [
    {
      "id": "hotel_id_from_list",
      "name": "Hotel Name",
      "reason": "Why this hotel fits the budget and traveler"
    }
  ],
  "itinerary": [
    {
      "day": 1,
      "date": "YYYY-MM-DD",
      "title": "Day 1 Title",
      "budget": 0,
      "activities": [
        {
          "time": "09:00",
          "activity": "Activity name",
          "place": "Place name from list",
          "type": "attraction/restaurant/cultural",
          "duration": "2 hours",
          "cost": 0,
          "localTip": "Local insight or tip"
        }
      ],
      "meals": [
        {
          "time": "12:00",
          "type": "lunch",
          "name": "Restaurant name",
          "cuisine": "Local cuisine type",
          "cost": 0
        }
      ],
      "transportation": "How to get around",
      "totalCost": 0
    }
  ],
  "totalBudget": 0,
  "budgetBreakdown": {
    "accommodation": 0,
    "activities": 0,
    "meals": 0,
    "transportation": 0
  },
  "localInsights": [
    "Cultural tip 1",
    "Local custom 2",
    "Must-try experience 3"
  ]
}

Return ONLY valid JSON, no markdown formatting."""


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_itinerary_prompt(request: ItineraryPrompt, days: int) -> str:
    hotel_lines = []
    for i, hotel in enumerate(request.hotels, start=1):
        line = f"{i}. {hotel.name} - {request.currency} {_num(hotel.price)}/night"
        if hotel.rating:
            line += f" (Rating: {_num(hotel.rating)})"
        if hotel.address:
            line += f" - {hotel.address}"
        hotel_lines.append(line)

    place_lines = []
    for i, place in enumerate(request.places, start=1):
        line = f"{i}. {place.name} ({place.type})"
        if place.rating:
            line += f" - Rating: {_num(place.rating)}"
        if place.address:
            line += f" - {place.address}"
        place_lines.append(line)

    preferences = (
        f"Traveler Preferences: {request.preferences}" if request.preferences else ""
    )

    sections = [
        f"You are an expert travel planner. Create a detailed, localized "
        f"{days}-day itinerary for {request.destination}.",
        f"Budget: {request.currency} {_num(request.budget)} for {request.adults} person(s)\n"
        f"Dates: {request.checkin} to {request.checkout}",
        "Available Hotels (choose 3-5 that fit the budget):\n" + "\n".join(hotel_lines),
        "Local Places to Visit:\n" + "\n".join(place_lines),
        preferences,
        _INSTRUCTIONS,
        _RESPONSE_SHAPE,
    ]
    return "\n\n".join(sections)


class OpenRouterService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        app_url: str = "http://localhost:3000",
    ):
        self._client = client
        self._api_key = api_key
        self._model = model
        self._app_url = app_url

    async def generate_itinerary(self, request: ItineraryPrompt, days: int) -> str:
        """Ask the model for an itinerary and return its JSON text, fences removed."""
        if not self._api_key:
            raise OpenRouterError("OPENROUTER_API_KEY is not configured")

        prompt = build_itinerary_prompt(request, days)

        try:
            resp = await self._client.post(
                API_URL,
                json={
                    "model": self._model,
                    "messages": [
                        {"role": "system", "content": _SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": TEMPERATURE,
                    "max_tokens": MAX_TOKENS,
                },
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                    "HTTP-Referer": self._app_url,
                    "X-Title": APP_TITLE,
                },
            )
        except httpx.HTTPError as exc:
            logger.exception("OpenRouter request failed")
            raise OpenRouterError(f"Failed to generate itinerary: {exc}")

        if resp.status_code == 429:
            raise RateLimitError("OpenRouter")
        if resp.status_code >= 400:
            logger.error("OpenRouter API error: %s", resp.text)
            raise OpenRouterError(
                f"Failed to generate itinerary: OpenRouter API error: "
                f"{resp.status_code} {resp.text}",
                status_code=resp.status_code,
            )

        data = resp.json()
        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            logger.warning("Unexpected OpenRouter response structure")
            content = ""

        return strip_code_fences(content)
