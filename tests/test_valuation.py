import pytest

from storefront.models import (
    DirectoryRecord,
    EquipmentBand,
    HoursBand,
    Impact,
    QualityBand,
    SizeBand,
    ValuationConfidence,
    ValuationFactors,
    WebRecord,
)
from storefront.valuation import categorize_business_industry, estimate_business_value
from storefront.valuation.categories import (
    NON_CLASSIFIABLE,
    RESTAURANTS_FOOD,
    RETAIL,
    find_industry_match,
    map_place_type_to_category,
)
from storefront.valuation.factors import (
    assess_business_size,
    assess_equipment_quality,
    assess_location_quality,
    assess_operating_hours,
    assess_web_presence_quality,
    estimate_years_in_business,
)
from storefront.valuation.scorer import (
    compute_multipliers,
    generate_comparables,
    get_age_multiplier,
    get_rating_multiplier,
)

PRIME_RESTAURANT = ValuationFactors(
    business_type=RESTAURANTS_FOOD,
    rating=4.6,
    review_count=120,
    years_in_business=10,
    has_website=True,
    web_presence_quality=QualityBand.EXCELLENT,
    location_quality=QualityBand.EXCELLENT,
    equipment_quality=EquipmentBand.EXCELLENT,
    business_size=SizeBand.LARGE,
    operating_hours=HoursBand.EXTENDED,
)


# --- categories ---

def test_place_types_take_precedence_over_text():
    assert categorize_business_industry("Gloria Jean's", ["cafe", "food"]) == RESTAURANTS_FOOD
    assert categorize_business_industry("Joe's Shop", ["establishment", "bank"]) == "Financial Services"


def test_unmapped_place_types_fall_back_to_keywords():
    assert categorize_business_industry("Downtown Mall", ["point_of_interest"]) == RETAIL


def test_keyword_groups_are_checked_in_order():
    # "pizza" and "shop" both match; food comes first
    assert categorize_business_industry("Joe's Pizza Shop") == RESTAURANTS_FOOD
    assert categorize_business_industry("Quick Auto Repair") == "Automotive & Boat"
    assert categorize_business_industry("Zorblax") == NON_CLASSIFIABLE
    assert categorize_business_industry("") == NON_CLASSIFIABLE


def test_category_lookups():
    assert map_place_type_to_category("bakery") == RESTAURANTS_FOOD
    assert map_place_type_to_category("unknown_tag") == NON_CLASSIFIABLE
    assert find_industry_match(RETAIL) == "retail"
    assert find_industry_match("Business") == "default"


# --- factor bands ---

def test_location_quality():
    assert assess_location_quality(None, None) == QualityBand.POOR
    assert assess_location_quality("123 Main St", None) == QualityBand.EXCELLENT
    assert assess_location_quality("5 Elm Rd", DirectoryRecord(name="x", rating=4.6)) == QualityBand.EXCELLENT
    assert assess_location_quality("5 Elm Rd", DirectoryRecord(name="x", rating=4.2)) == QualityBand.GOOD
    assert assess_location_quality("5 Elm Rd", DirectoryRecord(name="x", rating=2.0)) == QualityBand.AVERAGE
    assert assess_location_quality("5 Elm Rd", None) == QualityBand.AVERAGE


def test_web_presence_quality():
    web = WebRecord(name="Joe's")
    assert assess_web_presence_quality(None, "https://joes.com") == QualityBand.POOR
    assert assess_web_presence_quality(web, None) == QualityBand.POOR
    assert assess_web_presence_quality(
        WebRecord(name="Joe's", is_generic_fallback=True), "https://joes.com"
    ) == QualityBand.POOR
    assert assess_web_presence_quality(WebRecord(name="Joe's", description="x" * 201), "https://joes.net") == QualityBand.GOOD
    assert assess_web_presence_quality(web, "https://www.facebook.com/joes") == QualityBand.AVERAGE
    assert assess_web_presence_quality(web, "https://www.gloriajeans.com") == QualityBand.GOOD
    assert assess_web_presence_quality(web, "joes.com") == QualityBand.GOOD
    assert assess_web_presence_quality(web, "https://joes.net") == QualityBand.AVERAGE


def test_web_presence_checks_host_not_path():
    web = WebRecord(name="Joe's")
    assert assess_web_presence_quality(web, "https://shop.example.org/page.com") == QualityBand.AVERAGE


@pytest.mark.parametrize("reviews, years, size", [
    (None, None, SizeBand.MICRO),
    (10, None, SizeBand.MICRO),
    (25, 3, SizeBand.SMALL),
    (60, 5, SizeBand.SMALL),
    (150, 8, SizeBand.MEDIUM),
    (600, 8, SizeBand.LARGE),
])
def test_review_volume_drives_age_and_size(reviews, years, size):
    directory = DirectoryRecord(name="x", user_ratings_total=reviews)
    assert estimate_years_in_business(directory) == years
    assert assess_business_size(directory) == size


def test_missing_directory_uses_defaults():
    assert estimate_years_in_business(None) is None
    assert assess_business_size(None) == SizeBand.MICRO
    assert assess_operating_hours(None) == HoursBand.STANDARD


def test_equipment_quality():
    assert assess_equipment_quality(["Premium Espresso Bar"]) == EquipmentBand.EXCELLENT
    assert assess_equipment_quality(["Modern Kitchen"]) == EquipmentBand.GOOD
    assert assess_equipment_quality([]) == EquipmentBand.AVERAGE


def test_operating_hours():
    assert assess_operating_hours(["Monday: Open 24 hours"]) == HoursBand.EXTENDED
    assert assess_operating_hours(["Friday: 9AM-Midnight"]) == HoursBand.EXTENDED
    assert assess_operating_hours(["Mon: Closed", "Tue: Closed", "Wed: Closed", "Thu: 9AM-5PM"]) == HoursBand.LIMITED
    assert assess_operating_hours(["Mon: Closed", "Tue: Closed", "Wed: 9AM-5PM"]) == HoursBand.STANDARD


def test_factors_accept_band_values_and_reject_unknown_ones():
    factors = ValuationFactors(location_quality="good", business_size="large")
    assert factors.location_quality == QualityBand.GOOD
    assert factors.business_size == SizeBand.LARGE

    with pytest.raises(ValueError):
        ValuationFactors(location_quality="spectacular")


# --- scorer ---

@pytest.mark.parametrize("rating, expected", [
    (5.0, 1.3), (4.5, 1.3), (4.0, 1.2), (3.7, 1.1), (3.0, 1.0), (2.5, 0.9), (1.0, 0.8),
])
def test_rating_multiplier(rating, expected):
    assert get_rating_multiplier(rating) == expected


@pytest.mark.parametrize("years, expected", [(12, 1.3), (10, 1.3), (5, 1.2), (2, 1.1), (1, 0.9)])
def test_age_multiplier(years, expected):
    assert get_age_multiplier(years) == expected


def test_rating_ignored_without_enough_reviews():
    factors = ValuationFactors(rating=5.0, review_count=10)
    assert compute_multipliers(factors)["rating"] == 1.0


def test_default_factors_valuation():
    result = estimate_business_value(ValuationFactors())

    assert result.estimated_value.mid == 31920
    assert result.estimated_value.low == 22344
    assert result.estimated_value.high == 41496
    assert result.confidence == ValuationConfidence.LOW
    assert len(result.factors) == 1
    assert result.factors[0].factor == "Poor Location"
    assert result.factors[0].impact == Impact.NEGATIVE
    assert "reduces value by 30%" in result.factors[0].description


def test_prime_restaurant_valuation():
    result = estimate_business_value(PRIME_RESTAURANT)

    assert result.estimated_value.mid == 303489
    assert result.estimated_value.low == 212442
    assert result.estimated_value.high == 394536
    assert result.confidence == ValuationConfidence.HIGH
    assert [f.factor for f in result.factors] == [
        "Prime Location",
        "Strong Reputation",
        "Established Business",
        "Strong Online Presence",
        "Quality Equipment/Assets",
    ]
    assert "40%" in result.factors[0].description
    assert all(f.impact == Impact.POSITIVE for f in result.factors)
    assert result.comparables[0] == "Local restaurants sold $40K-$120K"
    assert "restaurants_food" in result.methodology


def test_industry_multiplier_is_reported_not_applied():
    result = estimate_business_value(PRIME_RESTAURANT)
    assert list(result.multipliers) == ["industry", "location", "rating", "age", "web", "equipment", "size", "hours"]
    assert result.multipliers["industry"] == 0.75

    applied = 65000.0
    for key in ("location", "rating", "age", "web", "equipment", "size", "hours"):
        applied *= result.multipliers[key]
    assert result.estimated_value.mid == round(applied)


def test_retail_valuation_medium_confidence():
    factors = ValuationFactors(
        business_type=RETAIL,
        has_website=True,
        web_presence_quality="good",
        location_quality="good",
    )
    result = estimate_business_value(factors)

    assert result.estimated_value.mid == 73920
    assert result.estimated_value.low == 51744
    assert result.estimated_value.high == 96096
    assert result.confidence == ValuationConfidence.MEDIUM
    assert [f.factor for f in result.factors] == ["Prime Location"]
    assert "20%" in result.factors[0].description


@pytest.mark.parametrize("factors", [
    ValuationFactors(),
    PRIME_RESTAURANT,
    ValuationFactors(business_type="Unknown", rating=2.0, review_count=40, years_in_business=1),
])
def test_range_brackets_mid(factors):
    value = estimate_business_value(factors).estimated_value
    assert value.low <= value.mid <= value.high


def test_better_location_never_lowers_value():
    mids = [
        estimate_business_value(ValuationFactors(location_quality=band)).estimated_value.mid
        for band in (QualityBand.POOR, QualityBand.AVERAGE, QualityBand.GOOD, QualityBand.EXCELLENT)
    ]
    assert mids == sorted(mids)


def test_generic_comparables():
    assert generate_comparables("Business") == [
        "Similar business businesses in area",
        "Local market comparables",
        "Industry benchmark multiples",
    ]
