from fastapi import APIRouter

from app.dependencies import AmadeusDep
from app.exceptions.custom import ApiError
from app.schemas.amadeus import FlightSearchParams
from app.schemas.responses import AirportSearchResponse, FlightSearchResponse

router = APIRouter(prefix="/api/flights")

MIN_AIRPORT_QUERY = 2


@router.get("/search", response_model=FlightSearchResponse)
async def search_flights(
    amadeus: AmadeusDep,
    origin: str | None = None,
    destination: str | None = None,
    departureDate: str | None = None,
    returnDate: str | None = None,
    adults: int = 1,
    children: int | None = None,
    infants: int | None = None,
    travelClass: str | None = None,
    currency: str = "USD",
) -> FlightSearchResponse:
    if not (origin and destination and departureDate):
        raise ApiError("Missing required parameters: origin, destination, departureDate")

    offers = await amadeus.search_flights(
        FlightSearchParams(
            originLocationCode=origin,
            destinationLocationCode=destination,
            departureDate=departureDate,
            returnDate=returnDate or None,
            adults=adults,
            children=children or None,
            infants=infants or None,
            travelClass=travelClass or None,
            currencyCode=currency,
        )
    )
    return FlightSearchResponse(data=offers, count=len(offers))


@router.get("/airports", response_model=AirportSearchResponse)
async def search_airports(amadeus: AmadeusDep, q: str | None = None) -> AirportSearchResponse:
    if not q or len(q) < MIN_AIRPORT_QUERY:
        return AirportSearchResponse(data=[])
    return AirportSearchResponse(data=await amadeus.search_airports(q))
