from app.mappers.hotels_budget import (
    build_rates_payload,
    filter_hotels_in_budget,
    is_in_destination,
    nightly_cap,
)
from app.schemas.liteapi import HotelInfo, RatesResponse


def _entry(hotel_id: str, amount: float, currency: str = "EUR", offer_id: str | None = None) -> dict:
    return {
        "hotelId": hotel_id,
        "roomTypes": [
            {
                "offerId": offer_id or f"offer-{hotel_id}",
                "rates": [{"retailRate": {"total": [{"amount": amount, "currency": currency}]}}],
            }
        ],
    }


def _rates(entries: list[dict], hotels: list[dict] | None = None) -> RatesResponse:
    return RatesResponse.model_validate({"data": entries, "hotels": hotels or []})


def test_nightly_cap():
    assert nightly_cap(1000, 3) == 1000 / 3


def test_payload_prefers_place_id():
    payload = build_rates_payload("2026-06-01", "2026-06-04", 2, "EUR", place_id="pid", destination="Paris")

    assert payload["placeId"] == "pid"
    assert "aiSearch" not in payload
    assert payload["maxRatesPerHotel"] == 1
    assert payload["includeHotelData"] is True
    assert payload["roomMapping"] is True
    assert payload["currency"] == "EUR"


def test_payload_falls_back_to_ai_search():
    payload = build_rates_payload("2026-06-01", "2026-06-04", 2, destination="Lisbon")

    assert payload["aiSearch"] == "hotels in Lisbon"
    assert "placeId" not in payload
    assert payload["currency"] == "USD"


def test_is_in_destination_matches_address_city_or_name():
    assert is_in_destination(HotelInfo(id="h1", address="1 Rue de PARIS"), "paris")
    assert is_in_destination(HotelInfo(id="h1", address="1 Rue X", city="Paris"), "Paris")
    assert is_in_destination(HotelInfo(id="h1", address="1 Rue X", name="Paris Inn"), "Paris")


def test_is_in_destination_rejects_elsewhere():
    assert not is_in_destination(HotelInfo(id="h1", name="Inn", address="5 Main St", city="Lyon"), "Paris")


def test_is_in_destination_keeps_unverifiable():
    assert is_in_destination(None, "Paris")
    assert is_in_destination(HotelInfo(id="h1", name="Somewhere"), "Paris")


def test_filter_keeps_under_cap_and_drops_over():
    # 1000 over 3 nights caps at 333.33 per night
    rates = _rates([_entry("a", 300), _entry("b", 400)])

    hotels = filter_hotels_in_budget(rates, "Paris", nightly_cap(1000, 3))

    assert [h.hotelId for h in hotels] == ["a"]
    assert hotels[0].price == 300
    assert hotels[0].currency == "EUR"
    assert hotels[0].offerId == "offer-a"


def test_filter_cap_is_inclusive():
    hotels = filter_hotels_in_budget(_rates([_entry("a", 200)]), "Paris", 200)
    assert len(hotels) == 1


def test_filter_sorts_and_truncates():
    rates = _rates([_entry(f"h{i}", price) for i, price in enumerate([90, 10, 50, 70, 30, 20, 60])])

    hotels = filter_hotels_in_budget(rates, "Paris", 100)

    assert [h.price for h in hotels] == [10, 20, 30, 50, 60]


def test_filter_respects_max_hotels():
    rates = _rates([_entry("a", 10), _entry("b", 20)])
    assert len(filter_hotels_in_budget(rates, "Paris", 100, max_hotels=1)) == 1


def test_filter_skips_entries_without_rate():
    rates = _rates([
        {"hotelId": "empty", "roomTypes": []},
        {"hotelId": "norate", "roomTypes": [{"offerId": "o", "rates": []}]},
        {"hotelId": "nototal", "roomTypes": [{"offerId": "o", "rates": [{"retailRate": {"total": []}}]}]},
        _entry("ok", 50),
    ])

    hotels = filter_hotels_in_budget(rates, "Paris", 100)

    assert [h.hotelId for h in hotels] == ["ok"]


def test_filter_drops_hotels_outside_destination():
    rates = _rates(
        [_entry("in", 50), _entry("out", 60)],
        hotels=[
            {"id": "in", "name": "Le Petit", "address": "3 Rue Cler, Paris"},
            {"id": "out", "name": "Gare Hotel", "address": "12 Quai, Lyon", "city": "Lyon"},
        ],
    )

    hotels = filter_hotels_in_budget(rates, "Paris", 100)

    assert [h.hotelId for h in hotels] == ["in"]
    assert hotels[0].name == "Le Petit"
    assert hotels[0].address == "3 Rue Cler, Paris"


def test_filter_uses_placeholder_name_and_request_currency():
    rates = _rates([{
        "hotelId": "lp123",
        "roomTypes": [{"offerId": "o1", "rates": [{"retailRate": {"total": [{"amount": 80}]}}]}],
    }])

    hotels = filter_hotels_in_budget(rates, "Paris", 100, currency="GBP")

    assert hotels[0].name == "Hotel lp123"
    assert hotels[0].currency == "GBP"


def test_filter_empty_response():
    assert filter_hotels_in_budget(RatesResponse(), "Paris", 100) == []
