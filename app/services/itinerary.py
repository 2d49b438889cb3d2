import asyncio
import logging

import httpx

from app.exceptions.custom import AmadeusError, ApiError, LiteAPIError, RateLimitError
from app.mappers.itinerary import merge_hotel_details, parse_itinerary, summarize_hotel
from app.mappers.places import combine_places, summarize_place
from app.mappers.validation import validate_itinerary_request
from app.schemas.amadeus import FlightOffer, FlightSearchParams
from app.schemas.google_places import Place
from app.schemas.itinerary import GenerateItineraryRequest, ItineraryPrompt, TripParams
from app.schemas.responses import ItineraryResponse
from app.services.amadeus import AmadeusService
from app.services.google_places import GooglePlacesService
from app.services.hotel_search import HotelBudgetService
from app.services.liteapi import LiteAPIService
from app.services.openrouter import OpenRouterService

logger = logging.getLogger(__name__)

MAX_ITINERARY_HOTELS = 5
MAX_ITINERARY_FLIGHTS = 5

NO_HOTELS_MSG = (
    "No hotels found within your budget. "
    "Please increase your budget or try a different destination."
)


class ItineraryService:
    def __init__(
        self,
        liteapi: LiteAPIService,
        hotels: HotelBudgetService,
        places: GooglePlacesService,
        amadeus: AmadeusService,
        openrouter: OpenRouterService,
    ):
        self._liteapi = liteapi
        self._hotels = hotels
        self._places = places
        self._amadeus = amadeus
        self._openrouter = openrouter

    async def resolve_place(
        self, destination: str, place_id: str | None = None
    ) -> tuple[str | None, str]:
        """Return (place id, place name) for a free-text destination.

        An exact case-insensitive name match wins over the first result.
        Lookup failures leave the place unresolved.
        """
        if place_id:
            logger.info("Using provided placeId %s for %s", place_id, destination)
            return place_id, destination

        try:
            result = await self._liteapi.search_places(destination)
        except (LiteAPIError, RateLimitError, httpx.HTTPError):
            logger.warning("Could not get place ID for %s, continuing without it", destination)
            return None, destination

        if not result.data:
            return None, destination

        wanted = destination.lower()
        selected = next(
            (p for p in result.data if p.displayName.lower() == wanted),
            result.data[0],
        )
        logger.info("Found place %s (%s) for %s", selected.displayName, selected.placeId, destination)
        return selected.placeId, selected.displayName or destination

    async def search_places(self, destination: str) -> list[Place]:
        attractions, restaurants, cultural = await asyncio.gather(
            self._places.search_attractions(destination),
            self._places.search_restaurants(destination),
            self._places.search_cultural_sites(destination),
        )
        places = combine_places(attractions, restaurants, cultural)
        logger.info("Found %d unique places for %s", len(places), destination)
        return places

    async def search_flights(self, trip: TripParams) -> list[FlightOffer]:
        if not trip.wants_flights:
            return []
        try:
            offers = await self._amadeus.search_flights(
                FlightSearchParams(
                    originLocationCode=trip.origin_airport,
                    destinationLocationCode=trip.destination_airport,
                    departureDate=trip.checkin,
                    returnDate=trip.checkout,
                    adults=trip.adults,
                    currencyCode=trip.currency,
                )
            )
        except (AmadeusError, RateLimitError, httpx.HTTPError):
            logger.exception(
                "Failed to fetch flights %s -> %s", trip.origin_airport, trip.destination_airport
            )
            return []
        return offers[:MAX_ITINERARY_FLIGHTS]

    async def generate(self, request: GenerateItineraryRequest) -> ItineraryResponse:
        trip = validate_itinerary_request(request)
        logger.info(
            "Generating itinerary for %s (budget=%s, %s to %s)",
            trip.destination, trip.budget, trip.checkin, trip.checkout,
        )

        place_id, place_name = await self.resolve_place(trip.destination, trip.place_id)

        hotels = await self._hotels.search_in_budget(
            place_name,
            trip.checkin,
            trip.checkout,
            trip.nights,
            trip.adults,
            trip.budget,
            currency=trip.currency,
            place_id=place_id,
            max_hotels=MAX_ITINERARY_HOTELS,
        )
        if not hotels:
            raise ApiError(NO_HOTELS_MSG, status_code=404)

        places = await self.search_places(trip.destination)
        flights = await self.search_flights(trip)

        text = await self._openrouter.generate_itinerary(
            ItineraryPrompt(
                destination=trip.destination,
                budget=trip.budget,
                currency=trip.currency,
                checkin=trip.checkin,
                checkout=trip.checkout,
                adults=trip.adults,
                preferences=trip.preferences,
                hotels=[summarize_hotel(h) for h in hotels],
                places=[summarize_place(p) for p in places],
            ),
            days=trip.nights,
        )
        itinerary = parse_itinerary(text)

        if isinstance(itinerary.get("hotels"), list):
            itinerary["hotels"] = merge_hotel_details(itinerary["hotels"], hotels)

        return ItineraryResponse(
            itinerary=itinerary,
            hotels=hotels,
            flights=flights,
            places=places,
        )
