from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from app.schemas.amadeus import FlightOffer
from app.schemas.google_places import Place, PlaceDetails
from app.schemas.liteapi import BudgetHotel


class ItineraryResponse(BaseModel):
    success: bool = True
    itinerary: dict[str, Any]
    hotels: list[BudgetHotel]
    flights: list[FlightOffer]
    places: list[Place]


class FlightSearchResponse(BaseModel):
    success: bool = True
    data: list[FlightOffer]
    count: int


class AirportSearchResponse(BaseModel):
    data: list[dict[str, Any]]


class PlaceDetailsResponse(BaseModel):
    data: PlaceDetails


class SavedRecordResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


class SavedRecordsResponse(BaseModel):
    data: list[dict[str, Any]]


class UserExistsResponse(BaseModel):
    exists: bool


class WebhookAck(BaseModel):
    status: str = "ok"
    received: bool = True
    event: str
