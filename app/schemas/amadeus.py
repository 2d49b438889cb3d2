from pydantic import BaseModel, ConfigDict


class FlightEndpoint(BaseModel):
    model_config = ConfigDict(extra="allow")

    iataCode: str
    terminal: str | None = None
    at: str


class FlightSegment(BaseModel):
    model_config = ConfigDict(extra="allow")

    departure: FlightEndpoint
    arrival: FlightEndpoint
    carrierCode: str
    number: str
    duration: str | None = None
    numberOfStops: int = 0


class FlightItinerary(BaseModel):
    model_config = ConfigDict(extra="allow")

    duration: str | None = None
    segments: list[FlightSegment] = []


class FlightFee(BaseModel):
    amount: str
    type: str


class FlightPrice(BaseModel):
    model_config = ConfigDict(extra="allow")

    currency: str
    total: str
    base: str | None = None
    fees: list[FlightFee] = []
    grandTotal: str | None = None


class FlightOffer(BaseModel):
    """An immutable quote; the provider's validity window is not tracked."""

    model_config = ConfigDict(extra="allow")

    id: str
    source: str | None = None
    oneWay: bool | None = None
    lastTicketingDate: str | None = None
    numberOfBookableSeats: int | None = None
    itineraries: list[FlightItinerary] = []
    price: FlightPrice
    validatingAirlineCodes: list[str] = []


class FlightSearchParams(BaseModel):
    originLocationCode: str
    destinationLocationCode: str
    departureDate: str
    returnDate: str | None = None
    adults: int = 1
    children: int | None = None
    infants: int | None = None
    travelClass: str | None = None
    currencyCode: str | None = None
