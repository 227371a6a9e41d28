import asyncio

import pytest
from unittest.mock import ANY, AsyncMock, MagicMock, patch

from loguru import logger

from storefront.directory_fetcher import search_business
from storefront.models import WebSearchResult
from storefront.web_search import (
    QUERY_TEMPLATE,
    calculate_relevance,
    extract_business_data,
    extract_business_name_from_query,
    generic_fallback_results,
    search_business_on_web,
)

PIZZA_RESULTS = [
    WebSearchResult(
        title="Joe's Pizza on Yelp",
        url="https://www.yelp.com/biz/joes-pizza",
        description="Best pizza in town. Call (555) 123-4567. Located at 42 Oak Avenue near the park, open late.",
        relevance=0.6,
    ),
    WebSearchResult(
        title="Joe's Pizza - Official Site",
        url="https://www.joespizza.com",
        description="Order online",
        relevance=0.9,
    ),
]


def _places_mock(search_response, details_response=None):
    instance = MagicMock()
    instance.text_search = AsyncMock(return_value=search_response)
    instance.place_details = AsyncMock(return_value=details_response or {"status": "NOT_FOUND"})
    return instance


def _serper_mock(organic):
    instance = MagicMock()
    instance.search = AsyncMock(return_value={"organic": organic})
    return instance


# --- web search ---

def test_calculate_relevance():
    query = QUERY_TEMPLATE.format(name="Gloria Jean's")
    text = "Gloria Jean's Coffees | Official Site gloriajeans.com"
    assert calculate_relevance(text, query) == pytest.approx(0.8)
    assert calculate_relevance("", query) == 0.0
    assert calculate_relevance(text, "") == 0.0


def test_extract_business_name_from_query():
    assert extract_business_name_from_query(QUERY_TEMPLATE.format(name="Joe's Pizza")) == "Joe's Pizza"
    assert extract_business_name_from_query("Joe Pizza business information") == "Joe Pizza"


def test_generic_fallback_results_give_placeholder_record():
    results = generic_fallback_results(QUERY_TEMPLATE.format(name="Joe's Pizza"))
    assert [r.relevance for r in results] == [0.5, 0.4]

    record = extract_business_data("Joe's Pizza", results)
    assert record.is_generic_fallback is True
    assert record.business_type == "Business"
    assert record.website is None


def test_extract_business_data_mines_results():
    record = extract_business_data("Joe's Pizza", PIZZA_RESULTS)

    assert record.is_generic_fallback is False
    assert record.website == "https://www.joespizza.com"
    assert record.phone == "(555) 123-4567"
    assert record.address == "42 Oak Avenue"
    assert record.business_type == "Pizza Restaurant"
    assert record.description == PIZZA_RESULTS[0].description


def test_extract_business_data_defaults_business_type():
    results = [WebSearchResult(title="Zorblax", url="https://zorblax.io", description="Welcome")]
    record = extract_business_data("Zorblax", results)
    assert record.business_type == "Business"
    assert record.website == "https://zorblax.io"


@pytest.mark.asyncio
async def test_search_business_on_web_uses_serper_results():
    organic = [{"title": "Joe's Pizza - Official Site", "link": "https://www.joespizza.com", "snippet": "Order online"}]
    with patch("storefront.web_search.SerperClient") as mock_serper:
        mock_serper.return_value = _serper_mock(organic)

        record = await search_business_on_web("Joe's Pizza")

    assert record.website == "https://www.joespizza.com"
    assert record.is_generic_fallback is False
    mock_serper.return_value.search.assert_awaited_once_with(QUERY_TEMPLATE.format(name="Joe's Pizza"), log=ANY)


@pytest.mark.asyncio
async def test_search_business_on_web_falls_back_without_api_key():
    with patch("storefront.web_search.SerperClient", side_effect=ValueError("SERPER_API_KEY must be set")):
        record = await search_business_on_web("Joe's Pizza")

    assert record.is_generic_fallback is True
    assert record.name == "Joe's Pizza"


@pytest.mark.asyncio
async def test_search_business_on_web_falls_back_on_timeout():
    with patch("storefront.web_search.SerperClient") as mock_serper:
        instance = MagicMock()
        instance.search = AsyncMock(side_effect=asyncio.TimeoutError())
        mock_serper.return_value = instance

        record = await search_business_on_web("Joe's Pizza")

    assert record.is_generic_fallback is True


# --- directory lookup ---

@pytest.mark.asyncio
async def test_search_business_picks_closest_name_and_fetches_details():
    search = {
        "status": "OK",
        "results": [
            {"name": "Pizza Hut", "place_id": "a"},
            {"name": "Joe's Pizza", "place_id": "b"},
        ],
    }
    details = {
        "status": "OK",
        "result": {
            "name": "Joe's Pizza",
            "formatted_address": "42 Oak Avenue, Springfield, IL 62701, USA",
            "international_phone_number": "+1 555-123-4567",
            "rating": 4.4,
            "user_ratings_total": 80,
            "types": ["restaurant", "food"],
            "opening_hours": {"weekday_text": ["Monday: 11AM-10PM"]},
        },
    }
    with patch("storefront.directory_fetcher.PlacesClient") as mock_places:
        mock_places.return_value = _places_mock(search, details)

        record = await search_business("Joe's Pizza", "42 Oak Avenue")

    instance = mock_places.return_value
    instance.text_search.assert_awaited_once_with("Joe's Pizza 42 Oak Avenue", log=ANY)
    instance.place_details.assert_awaited_once_with("b", log=ANY)
    assert record.place_id == "b"
    assert record.phone == "+1 555-123-4567"
    assert record.weekday_text == ["Monday: 11AM-10PM"]
    assert record.types == ["restaurant", "food"]


@pytest.mark.asyncio
async def test_search_business_falls_back_to_search_result_when_details_fail():
    search = {"status": "OK", "results": [{"name": "Joe's Pizza", "place_id": "b", "rating": 4.1}]}
    with patch("storefront.directory_fetcher.PlacesClient") as mock_places:
        mock_places.return_value = _places_mock(search, {"status": "INVALID_REQUEST"})

        record = await search_business("Joe's Pizza")

    assert record.name == "Joe's Pizza"
    assert record.rating == 4.1
    mock_places.return_value.text_search.assert_awaited_once_with("Joe's Pizza", log=ANY)


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    {"status": "ZERO_RESULTS", "results": []},
    {"status": "OK", "results": []},
    {"status": "REQUEST_DENIED", "error_message": "bad key"},
])
async def test_search_business_returns_none_without_results(response):
    with patch("storefront.directory_fetcher.PlacesClient") as mock_places:
        mock_places.return_value = _places_mock(response)

        assert await search_business("Joe's Pizza") is None


@pytest.mark.asyncio
async def test_search_business_returns_none_when_not_configured():
    with patch("storefront.directory_fetcher.PlacesClient", side_effect=ValueError("GOOGLE_PLACES_API_KEY must be set")):
        assert await search_business("Joe's Pizza") is None


@pytest.mark.asyncio
async def test_search_business_returns_none_on_timeout():
    with patch("storefront.directory_fetcher.PlacesClient") as mock_places:
        instance = MagicMock()
        instance.text_search = AsyncMock(side_effect=asyncio.TimeoutError())
        mock_places.return_value = instance

        assert await search_business("Joe's Pizza") is None


@pytest.mark.asyncio
async def test_lookups_forward_bound_logger_to_clients():
    log = logger.bind(image="sign.jpg")
    search = {"status": "OK", "results": [{"name": "Joe's Pizza", "place_id": "b"}]}
    with patch("storefront.directory_fetcher.PlacesClient") as mock_places, \
         patch("storefront.web_search.SerperClient") as mock_serper:
        mock_places.return_value = _places_mock(search)
        mock_serper.return_value = _serper_mock([])

        await search_business("Joe's Pizza", log=log)
        await search_business_on_web("Joe's Pizza", log=log)

    mock_places.return_value.text_search.assert_awaited_once_with("Joe's Pizza", log=log)
    mock_places.return_value.place_details.assert_awaited_once_with("b", log=log)
    mock_serper.return_value.search.assert_awaited_once_with(QUERY_TEMPLATE.format(name="Joe's Pizza"), log=log)
