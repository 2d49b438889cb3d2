import logging

from fastapi import APIRouter

from app.dependencies import BookingDep, LiteAPIDep
from app.exceptions.custom import ApiError
from app.schemas.booking import BookRequest, PrebookRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/places")
async def search_places(liteapi: LiteAPIDep, q: str | None = None) -> dict:
    if not q:
        raise ApiError("Query parameter required")
    result = await liteapi.search_places(q)
    return result.model_dump()


@router.post("/rates")
async def search_rates(params: dict, liteapi: LiteAPIDep) -> dict:
    return await liteapi.search_rates(params)


@router.get("/hotel")
async def get_hotel(liteapi: LiteAPIDep, hotelId: str | None = None) -> dict:
    if not hotelId:
        raise ApiError("hotelId parameter required")
    return await liteapi.get_hotel_details(hotelId)


@router.post("/prebook")
async def prebook(request: PrebookRequest, service: BookingDep) -> dict:
    return await service.prebook(request.offerId)


@router.post("/book")
async def book(request: BookRequest, service: BookingDep) -> dict:
    logger.info("Booking request for prebook %s", request.prebookId)
    return await service.book(request)
