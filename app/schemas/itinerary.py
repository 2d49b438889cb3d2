from typing import Any

from pydantic import BaseModel, ConfigDict


class GenerateItineraryRequest(BaseModel):
    destination: str | None = None
    placeId: str | None = None
    budget: float | str | None = None
    currency: str = "USD"
    checkin: str | None = None
    checkout: str | None = None
    adults: int = 2
    preferences: str | None = None
    originAirport: str | None = None
    destinationAirport: str | None = None


class HotelSummary(BaseModel):
    id: str
    name: str
    price: float
    address: str | None = None
    rating: float | None = None


class PlaceSummary(BaseModel):
    name: str
    type: str
    address: str | None = None
    rating: float | None = None


class ItineraryPrompt(BaseModel):
    destination: str
    budget: float
    currency: str
    checkin: str
    checkout: str
    adults: int
    preferences: str | None = None
    hotels: list[HotelSummary] = []
    places: list[PlaceSummary] = []


# LLM output. Only the structure is checked: the document and its days are
# objects, and the collections are lists. Scalar leaves are taken as given.


class Activity(BaseModel):
    model_config = ConfigDict(extra="allow")

    time: Any = None
    activity: Any = None
    place: Any = None
    type: Any = None
    duration: Any = None
    cost: Any = None
    localTip: Any = None


class Meal(BaseModel):
    model_config = ConfigDict(extra="allow")

    time: Any = None
    type: Any = None
    name: Any = None
    cuisine: Any = None
    cost: Any = None


class ItineraryDay(BaseModel):
    model_config = ConfigDict(extra="allow")

    day: Any = None
    date: Any = None
    title: Any = None
    budget: Any = None
    activities: list[Activity] = []
    meals: list[Meal] = []
    transportation: Any = None
    totalCost: Any = None


class BudgetBreakdown(BaseModel):
    model_config = ConfigDict(extra="allow")

    accommodation: Any = None
    activities: Any = None
    meals: Any = None
    transportation: Any = None


class GeneratedItinerary(BaseModel):
    model_config = ConfigDict(extra="allow")

    summary: Any = None
    hotels: list[dict[str, Any]] = []
    itinerary: list[ItineraryDay] = []
    totalBudget: Any = None
    budgetBreakdown: BudgetBreakdown | None = None
    localInsights: list[Any] = []


class TripParams(BaseModel):
    """A validated itinerary request with dates and airports normalized."""

    destination: str
    place_id: str | None = None
    budget: float
    currency: str
    checkin: str
    checkout: str
    nights: int
    adults: int
    preferences: str | None = None
    origin_airport: str | None = None
    destination_airport: str | None = None

    @property
    def wants_flights(self) -> bool:
        return bool(self.origin_airport and self.destination_airport)
