from fastapi import APIRouter

from app.dependencies import ItineraryDep
from app.schemas.itinerary import GenerateItineraryRequest
from app.schemas.responses import ItineraryResponse

router = APIRouter(prefix="/api/itinerary")


@router.post("/generate", response_model=ItineraryResponse)
async def generate_itinerary(
    request: GenerateItineraryRequest, service: ItineraryDep
) -> ItineraryResponse:
    return await service.generate(request)
