from fastapi import APIRouter

from app.dependencies import GooglePlacesDep
from app.exceptions.custom import ApiError
from app.schemas.responses import PlaceDetailsResponse

router = APIRouter(prefix="/api/places")


@router.get("/{place_id}/details", response_model=PlaceDetailsResponse)
async def get_place_details(place_id: str, google_places: GooglePlacesDep) -> PlaceDetailsResponse:
    details = await google_places.get_place_details(place_id)
    if details is None:
        raise ApiError("Place not found", status_code=404)
    return PlaceDetailsResponse(data=details)
