from app.schemas.google_places import (
    Geometry,
    GooglePlace,
    Location,
    PhotoReference,
    Place,
    PlaceDetails,
    Review,
    WeeklyHours,
)
from app.schemas.itinerary import PlaceSummary

PER_CATEGORY_LIMIT = 10
COMBINED_LIMIT = 20


def _display_name(place: GooglePlace) -> str:
    if place.displayName and place.displayName.text:
        return place.displayName.text
    return ""


def to_place(place: GooglePlace) -> Place:
    geometry = None
    if place.location:
        geometry = Geometry(
            location=Location(
                lat=place.location.latitude, lng=place.location.longitude
            )
        )
    return Place(
        place_id=place.id,
        name=_display_name(place),
        types=place.types,
        rating=place.rating,
        user_ratings_total=place.userRatingCount,
        formatted_address=place.formattedAddress,
        geometry=geometry,
        photos=[PhotoReference(photo_reference=p.name) for p in place.photos],
    )


def to_place_details(place: GooglePlace) -> PlaceDetails:
    base = to_place(place)
    opening_hours = None
    if place.regularOpeningHours:
        opening_hours = WeeklyHours(
            weekday_text=place.regularOpeningHours.weekdayDescriptions
        )
    reviews = [
        Review(
            author_name=(
                review.authorAttribution.displayName
                if review.authorAttribution and review.authorAttribution.displayName
                else "Anonymous"
            ),
            rating=review.rating,
            text=review.text.text if review.text else None,
        )
        for review in place.reviews
    ]
    return PlaceDetails(
        **base.model_dump(),
        website=place.websiteUri,
        international_phone_number=place.nationalPhoneNumber,
        opening_hours=opening_hours,
        reviews=reviews,
    )


def fallback_places(query: str) -> list[Place]:
    """Generic places used when the Places API is unavailable."""
    return [
        Place(
            place_id="fallback_1",
            name=f"{query} Main Square",
            types=["tourist_attraction", "point_of_interest"],
            rating=4.5,
            formatted_address=f"{query}, City Center",
        ),
        Place(
            place_id="fallback_2",
            name=f"{query} Historical Museum",
            types=["museum", "point_of_interest"],
            rating=4.3,
            formatted_address=f"{query}, Museum District",
        ),
        Place(
            place_id="fallback_3",
            name=f"{query} Local Market",
            types=["shopping_mall", "point_of_interest"],
            rating=4.2,
            formatted_address=f"{query}, Market Area",
        ),
    ]


def dedupe_by_name(places: list[Place]) -> list[Place]:
    """Keep one place per exact name.

    A name keeps the position of its first occurrence but the record of its
    last occurrence.
    """
    by_name: dict[str, Place] = {}
    for place in places:
        by_name[place.name] = place
    return list(by_name.values())


def combine_places(
    *categories: list[Place],
    per_category: int = PER_CATEGORY_LIMIT,
    limit: int = COMBINED_LIMIT,
) -> list[Place]:
    combined: list[Place] = []
    for places in categories:
        combined.extend(places[:per_category])
    return dedupe_by_name(combined)[:limit]


def summarize_place(place: Place) -> PlaceSummary:
    return PlaceSummary(
        name=place.name,
        type=place.types[0] if place.types else "point_of_interest",
        address=place.formatted_address,
        rating=place.rating,
    )
