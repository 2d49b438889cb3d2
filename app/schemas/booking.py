from typing import Any

from pydantic import BaseModel, ConfigDict


class PrebookRequest(BaseModel):
    offerId: str | None = None


class Holder(BaseModel):
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None


class Guest(BaseModel):
    occupancyNumber: int = 1
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None


class BookRequest(BaseModel):
    prebookId: str | None = None
    transactionId: str | None = None
    holder: Holder | None = None
    guests: list[Guest] | None = None


class UserSession(BaseModel):
    user_id: str
    email: str | None = None
    access_token: str


class SaveBookingRequest(BaseModel):
    bookingData: dict[str, Any] | None = None


class SaveItineraryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    destination: str
    fromCity: str | None = None
    checkin: str | None = None
    checkout: str | None = None
    currency: str = "USD"
    budget: float | None = None
    adults: int | None = None
    preferences: str | None = None
    itinerary: dict[str, Any]
    hotels: list[dict[str, Any]] = []
    flights: list[dict[str, Any]] = []
    formData: dict[str, Any] | None = None


class CheckUserRequest(BaseModel):
    email: str | None = None
