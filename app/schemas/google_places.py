from pydantic import BaseModel


class LatLng(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0


class DisplayName(BaseModel):
    text: str | None = None


class PlacePhoto(BaseModel):
    name: str | None = None


class LocalizedText(BaseModel):
    text: str | None = None


class AuthorAttribution(BaseModel):
    displayName: str | None = None


class PlaceReview(BaseModel):
    rating: float | None = None
    text: LocalizedText | None = None
    authorAttribution: AuthorAttribution | None = None


class OpeningHours(BaseModel):
    weekdayDescriptions: list[str] = []


class GooglePlace(BaseModel):
    id: str | None = None
    displayName: DisplayName | None = None
    formattedAddress: str | None = None
    nationalPhoneNumber: str | None = None
    websiteUri: str | None = None
    location: LatLng | None = None
    rating: float | None = None
    userRatingCount: int | None = None
    types: list[str] = []
    photos: list[PlacePhoto] = []
    regularOpeningHours: OpeningHours | None = None
    reviews: list[PlaceReview] = []


class TextSearchResponse(BaseModel):
    places: list[GooglePlace] = []


# Normalized shapes returned to callers


class Location(BaseModel):
    lat: float
    lng: float


class Geometry(BaseModel):
    location: Location


class PhotoReference(BaseModel):
    photo_reference: str | None = None


class Place(BaseModel):
    place_id: str | None = None
    name: str
    types: list[str] = []
    rating: float | None = None
    user_ratings_total: int | None = None
    formatted_address: str | None = None
    geometry: Geometry | None = None
    photos: list[PhotoReference] = []


class Review(BaseModel):
    author_name: str
    rating: float | None = None
    text: str | None = None


class WeeklyHours(BaseModel):
    weekday_text: list[str] = []


class PlaceDetails(Place):
    website: str | None = None
    international_phone_number: str | None = None
    opening_hours: WeeklyHours | None = None
    reviews: list[Review] = []
