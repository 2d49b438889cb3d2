import logging

from app.exceptions.custom import LiteAPIError
from app.mappers.hotels_budget import (
    DEFAULT_MAX_HOTELS,
    build_rates_payload,
    filter_hotels_in_budget,
    nightly_cap,
)
from app.schemas.liteapi import BudgetHotel, RatesResponse
from app.services.liteapi import LiteAPIService

logger = logging.getLogger(__name__)


class HotelBudgetService:
    def __init__(self, liteapi: LiteAPIService):
        self._liteapi = liteapi

    async def search_in_budget(
        self,
        destination: str,
        checkin: str,
        checkout: str,
        nights: int,
        adults: int,
        budget: float,
        currency: str = "USD",
        place_id: str | None = None,
        max_hotels: int = DEFAULT_MAX_HOTELS,
    ) -> list[BudgetHotel]:
        """Cheapest hotels whose nightly price fits the total budget.

        Upstream errors propagate. An empty list means nothing qualified.
        """
        max_price = nightly_cap(budget, nights)
        payload = build_rates_payload(
            checkin,
            checkout,
            adults,
            currency=currency,
            place_id=place_id,
            destination=destination,
        )

        data = await self._liteapi.search_rates(payload)
        try:
            rates = RatesResponse(**data)
        except (ValueError, TypeError):
            raise LiteAPIError("Invalid rates response from LiteAPI")

        hotels = filter_hotels_in_budget(
            rates,
            destination,
            max_price,
            currency=currency,
            max_hotels=max_hotels,
        )

        logger.info(
            "Found %d hotels in %s at or under %.2f %s/night",
            len(hotels), destination, max_price, currency,
        )
        return hotels
