import logging

import httpx

from app.mappers.places import fallback_places, to_place, to_place_details
from app.schemas.google_places import GooglePlace, Place, PlaceDetails, TextSearchResponse

logger = logging.getLogger(__name__)

SEARCH_URL = "https://places.googleapis.com/v1/places:searchText"
DETAILS_URL = "https://places.googleapis.com/v1/places"

FIELD_MASK = (
    "places.id,"
    "places.displayName,"
    "places.formattedAddress,"
    "places.rating,"
    "places.userRatingCount,"
    "places.types,"
    "places.location,"
    "places.photos"
)

DETAILS_FIELD_MASK = (
    "id,"
    "displayName,"
    "formattedAddress,"
    "rating,"
    "userRatingCount,"
    "types,"
    "location,"
    "photos,"
    "websiteUri,"
    "nationalPhoneNumber,"
    "regularOpeningHours,"
    "reviews"
)

MAX_RESULTS = 20
CULTURAL_TYPES = ("museum", "art_gallery", "church", "mosque", "temple", "synagogue")


class GooglePlacesService:
    def __init__(self, client: httpx.AsyncClient, api_key: str):
        self._client = client
        self._api_key = api_key

    async def text_search(
        self,
        query: str,
        location: tuple[float, float] | None = None,
        radius: int = 5000,
    ) -> list[Place]:
        """Search places by text. Falls back to generic places, never raises."""
        if not self._api_key:
            logger.warning("GOOGLE_PLACES_API_KEY not configured, using fallback")
            return fallback_places(query)

        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self._api_key,
            "X-Goog-FieldMask": FIELD_MASK,
        }
        payload: dict = {"textQuery": query, "maxResultCount": MAX_RESULTS}
        if location:
            lat, lng = location
            payload["locationBias"] = {
                "circle": {
                    "center": {"latitude": lat, "longitude": lng},
                    "radius": radius,
                }
            }

        try:
            resp = await self._client.post(SEARCH_URL, json=payload, headers=headers)
        except httpx.HTTPError:
            logger.exception("Error searching places for %s", query)
            return fallback_places(query)

        if resp.status_code >= 400:
            logger.error("Google Places API error: %s %s", resp.status_code, resp.text)
            return fallback_places(query)

        try:
            data = TextSearchResponse(**resp.json())
        except (ValueError, TypeError):
            logger.error("Unexpected Google Places payload for %s: %s", query, resp.text)
            return fallback_places(query)

        if not data.places:
            logger.info("No results for query: %s", query)
            return fallback_places(query)

        return [to_place(place) for place in data.places]

    async def get_place_details(self, place_id: str) -> PlaceDetails | None:
        if not self._api_key:
            return None

        headers = {
            "X-Goog-Api-Key": self._api_key,
            "X-Goog-FieldMask": DETAILS_FIELD_MASK,
        }

        try:
            resp = await self._client.get(f"{DETAILS_URL}/{place_id}", headers=headers)
        except httpx.HTTPError:
            logger.exception("Error getting place details for %s", place_id)
            return None

        if resp.status_code >= 400:
            logger.error("Google Places API error: %s %s", resp.status_code, resp.text)
            return None

        try:
            return to_place_details(GooglePlace(**resp.json()))
        except (ValueError, TypeError):
            logger.error("Unexpected Google Places details payload for %s: %s", place_id, resp.text)
            return None

    async def search_attractions(
        self, destination: str, location: tuple[float, float] | None = None
    ) -> list[Place]:
        return await self.text_search(f"{destination} tourist attractions", location, 10000)

    async def search_restaurants(
        self, destination: str, location: tuple[float, float] | None = None
    ) -> list[Place]:
        return await self.text_search(f"{destination} restaurants", location, 5000)

    async def search_cultural_sites(
        self, destination: str, location: tuple[float, float] | None = None
    ) -> list[Place]:
        results: list[Place] = []
        for place_type in CULTURAL_TYPES:
            results.extend(
                await self.text_search(f"{destination} {place_type}", location, 10000)
            )
        return results[:MAX_RESULTS]
