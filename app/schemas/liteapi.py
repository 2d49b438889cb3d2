from pydantic import BaseModel, ConfigDict


class LiteAPIPlace(BaseModel):
    model_config = ConfigDict(extra="allow")

    placeId: str
    displayName: str = ""
    formattedAddress: str | None = None


class PlacesResponse(BaseModel):
    data: list[LiteAPIPlace] = []


class RateAmount(BaseModel):
    amount: float
    currency: str | None = None


class RetailRate(BaseModel):
    total: list[RateAmount] = []


class Rate(BaseModel):
    retailRate: RetailRate | None = None


class RoomType(BaseModel):
    offerId: str | None = None
    rates: list[Rate] = []


class HotelRates(BaseModel):
    hotelId: str
    roomTypes: list[RoomType] = []


class HotelInfo(BaseModel):
    id: str
    name: str | None = None
    address: str | None = None
    city: str | None = None
    rating: float | None = None
    main_photo: str | None = None


class RatesResponse(BaseModel):
    data: list[HotelRates] = []
    hotels: list[HotelInfo] = []


class BudgetHotel(BaseModel):
    hotelId: str
    name: str
    price: float
    currency: str
    address: str | None = None
    rating: float | None = None
    main_photo: str | None = None
    offerId: str | None = None
