import logging
import time

import httpx

from app.exceptions.custom import AmadeusError, RateLimitError
from app.schemas.amadeus import FlightOffer, FlightSearchParams

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"
LOCATIONS_PATH = "/v1/reference-data/locations"

MAX_FLIGHT_RESULTS = 20
MAX_AIRPORT_RESULTS = 10
TOKEN_REFRESH_MARGIN = 300  # seconds


class AmadeusService:
    """Flight offers and airport lookup with a cached client-credentials token.

    Without credentials every search returns no results instead of failing.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        api_secret: str,
        base_url: str = "https://test.api.amadeus.com",
    ):
        self._client = client
        self._api_key = api_key
        self._api_secret = api_secret
        self._base_url = base_url.rstrip("/")
        self._access_token: str | None = None
        self._token_expiry = 0.0

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._api_secret)

    async def _get_access_token(self) -> str:
        if self._access_token and time.monotonic() < self._token_expiry:
            return self._access_token

        resp = await self._client.post(
            f"{self._base_url}{TOKEN_PATH}",
            data={
                "grant_type": "client_credentials",
                "client_id": self._api_key,
                "client_secret": self._api_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        if resp.status_code >= 400:
            raise AmadeusError(
                f"Failed to authenticate with Amadeus: {resp.text}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
            self._access_token = data["access_token"]
            expires_in = int(data.get("expires_in", 1799))
        except (ValueError, KeyError, TypeError, AttributeError):
            raise AmadeusError("Invalid token response from Amadeus", status_code=resp.status_code)
        self._token_expiry = time.monotonic() + expires_in - TOKEN_REFRESH_MARGIN
        logger.info("Obtained Amadeus access token (expires in %ds)", expires_in)
        return self._access_token

    async def search_flights(self, params: FlightSearchParams) -> list[FlightOffer]:
        if not self.configured:
            logger.warning("Amadeus API not configured, returning empty results")
            return []

        token = await self._get_access_token()

        query: dict = {
            "originLocationCode": params.originLocationCode,
            "destinationLocationCode": params.destinationLocationCode,
            "departureDate": params.departureDate,
            "adults": params.adults,
        }
        if params.returnDate:
            query["returnDate"] = params.returnDate
        if params.children:
            query["children"] = params.children
        if params.infants:
            query["infants"] = params.infants
        if params.travelClass:
            query["travelClass"] = params.travelClass
        if params.currencyCode:
            query["currencyCode"] = params.currencyCode
        query["max"] = MAX_FLIGHT_RESULTS

        resp = await self._client.get(
            f"{self._base_url}{FLIGHT_OFFERS_PATH}",
            params=query,
            headers={"Authorization": f"Bearer {token}"},
        )

        if resp.status_code == 429:
            raise RateLimitError("Amadeus")
        if resp.status_code >= 400:
            logger.error("Amadeus API error: %s %s", resp.status_code, resp.text)
            raise AmadeusError(
                f"Amadeus API error: {resp.status_code}", status_code=resp.status_code
            )

        try:
            offers = [FlightOffer(**offer) for offer in resp.json().get("data", [])]
        except (ValueError, TypeError, AttributeError):
            logger.error("Unexpected Amadeus flight offers payload: %s", resp.text)
            raise AmadeusError("Invalid response from Amadeus", status_code=resp.status_code)
        logger.info(
            "Found %d flight offers %s -> %s",
            len(offers), params.originLocationCode, params.destinationLocationCode,
        )
        return offers

    async def search_airports(self, keyword: str) -> list[dict]:
        """Airport and city suggestions for autocomplete. Never raises."""
        if not self.configured:
            return []

        try:
            token = await self._get_access_token()
            resp = await self._client.get(
                f"{self._base_url}{LOCATIONS_PATH}",
                params={
                    "subType": "AIRPORT,CITY",
                    "keyword": keyword,
                    "max": MAX_AIRPORT_RESULTS,
                },
                headers={"Authorization": f"Bearer {token}"},
            )
        except (AmadeusError, httpx.HTTPError):
            logger.exception("Error searching airports for %s", keyword)
            return []

        if resp.status_code >= 400:
            logger.warning("Airport search returned %d for %s", resp.status_code, keyword)
            return []

        try:
            return resp.json().get("data", [])
        except (ValueError, AttributeError):
            logger.warning("Unexpected airport search payload for %s", keyword)
            return []
