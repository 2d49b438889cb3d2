import logging

from app.schemas.liteapi import BudgetHotel, HotelInfo, RatesResponse

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOTELS = 5


def nightly_cap(budget: float, nights: int) -> float:
    return budget / nights


def build_rates_payload(
    checkin: str,
    checkout: str,
    adults: int,
    currency: str = "USD",
    place_id: str | None = None,
    destination: str | None = None,
) -> dict:
    """Rate search body for a budget lookup; a place id beats free-text search."""
    payload: dict = {
        "checkin": checkin,
        "checkout": checkout,
        "adults": adults,
        "currency": currency,
        "maxRatesPerHotel": 1,
        "includeHotelData": True,
        "roomMapping": True,
    }
    if place_id:
        payload["placeId"] = place_id
    elif destination:
        payload["aiSearch"] = f"hotels in {destination}"
    return payload


def is_in_destination(hotel: HotelInfo | None, destination: str) -> bool:
    """Best-effort substring check; hotels we cannot verify are kept."""
    if hotel is None or not hotel.address:
        return True
    needle = destination.lower()
    return any(
        needle in (field or "").lower()
        for field in (hotel.address, hotel.city, hotel.name)
    )


def filter_hotels_in_budget(
    rates: RatesResponse,
    destination: str,
    max_price_per_night: float,
    currency: str = "USD",
    max_hotels: int = DEFAULT_MAX_HOTELS,
) -> list[BudgetHotel]:
    hotel_info = {hotel.id: hotel for hotel in rates.hotels}
    hotels: list[BudgetHotel] = []

    for entry in rates.data:
        room_type = entry.roomTypes[0] if entry.roomTypes else None
        rate = room_type.rates[0] if room_type and room_type.rates else None
        if not rate or not rate.retailRate or not rate.retailRate.total:
            continue

        total = rate.retailRate.total[0]
        if total.amount > max_price_per_night:
            continue

        info = hotel_info.get(entry.hotelId)
        if not is_in_destination(info, destination):
            logger.warning(
                "Filtered out hotel not in destination: %s (%s) - searched for: %s",
                info.name, info.address, destination,
            )
            continue

        hotels.append(
            BudgetHotel(
                hotelId=entry.hotelId,
                name=(info.name if info else None) or f"Hotel {entry.hotelId}",
                price=total.amount,
                currency=total.currency or currency,
                address=info.address if info else None,
                rating=info.rating if info else None,
                main_photo=info.main_photo if info else None,
                offerId=room_type.offerId,
            )
        )

    hotels.sort(key=lambda h: h.price)
    return hotels[:max_hotels]
