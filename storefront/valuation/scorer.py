"""
Heuristic business valuation.

An industry base value is pushed through a fixed chain of multipliers
(location, rating, age, web presence, equipment, size, hours) to reach the
mid-point; the range is mid ±30%. Every branch has a default, so a
valuation is always produced.
"""
import math
from typing import Dict, List

from loguru import logger

from storefront.models import (
    EquipmentBand,
    EstimatedValue,
    HoursBand,
    Impact,
    QualityBand,
    SizeBand,
    ValuationConfidence,
    ValuationFactor,
    ValuationFactors,
    ValuationResult,
)
from storefront.valuation.categories import DEFAULT_INDUSTRY, INDUSTRY_MULTIPLIERS, find_industry_match

LOCATION_MULTIPLIERS = {
    QualityBand.EXCELLENT: 1.4,  # Prime location, high foot traffic
    QualityBand.GOOD: 1.2,
    QualityBand.AVERAGE: 1.0,
    QualityBand.POOR: 0.7,
}

# (minimum rating, multiplier), highest threshold first
RATING_MULTIPLIERS = [
    (4.5, 1.3),
    (4.0, 1.2),
    (3.5, 1.1),
    (3.0, 1.0),
    (2.5, 0.9),
]
RATING_FLOOR_MULTIPLIER = 0.8

AGE_MULTIPLIERS = [
    (10, 1.3),
    (5, 1.2),
    (2, 1.1),
]
NEW_BUSINESS_MULTIPLIER = 0.9

WEB_MULTIPLIERS = {
    QualityBand.EXCELLENT: 1.15,
    QualityBand.GOOD: 1.1,
    QualityBand.AVERAGE: 1.05,
    QualityBand.POOR: 1.0,
}
NO_WEBSITE_MULTIPLIER = 0.95

EQUIPMENT_MULTIPLIERS = {
    EquipmentBand.EXCELLENT: 1.2,
    EquipmentBand.GOOD: 1.1,
    EquipmentBand.AVERAGE: 1.0,
    EquipmentBand.BASIC: 0.9,
}

SIZE_MULTIPLIERS = {
    SizeBand.LARGE: 1.3,
    SizeBand.MEDIUM: 1.2,
    SizeBand.SMALL: 1.0,
    SizeBand.MICRO: 0.8,
}

HOURS_MULTIPLIERS = {
    HoursBand.EXTENDED: 1.1,
    HoursBand.STANDARD: 1.0,
    HoursBand.LIMITED: 0.9,
}

LOW_RANGE = 0.7
HIGH_RANGE = 1.3


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_rating_multiplier(rating: float) -> float:
    for threshold, multiplier in RATING_MULTIPLIERS:
        if rating >= threshold:
            return multiplier
    return RATING_FLOOR_MULTIPLIER


def get_age_multiplier(years: float) -> float:
    for threshold, multiplier in AGE_MULTIPLIERS:
        if years >= threshold:
            return multiplier
    return NEW_BUSINESS_MULTIPLIER


def _has_reputation_data(factors: ValuationFactors) -> bool:
    return bool(factors.rating and factors.review_count and factors.review_count > 10)


def compute_multipliers(factors: ValuationFactors) -> Dict[str, float]:
    """Adjustment multipliers in the order they are applied to the base value."""
    rating = get_rating_multiplier(factors.rating) if _has_reputation_data(factors) else 1.0
    age = get_age_multiplier(factors.years_in_business) if factors.years_in_business else 1.0
    web = WEB_MULTIPLIERS[factors.web_presence_quality] if factors.has_website else NO_WEBSITE_MULTIPLIER

    return {
        "location": LOCATION_MULTIPLIERS[factors.location_quality],
        "rating": rating,
        "age": age,
        "web": web,
        "equipment": EQUIPMENT_MULTIPLIERS[factors.equipment_quality],
        "size": SIZE_MULTIPLIERS[factors.business_size],
        "hours": HOURS_MULTIPLIERS[factors.operating_hours],
    }


def calculate_confidence(factors: ValuationFactors) -> ValuationConfidence:
    score = 0

    if factors.rating and factors.review_count:
        if factors.review_count >= 50:
            score += 2
        elif factors.review_count >= 20:
            score += 1

    if factors.years_in_business and factors.years_in_business >= 2:
        score += 1

    if factors.has_website:
        score += 1

    if find_industry_match(factors.business_type) != DEFAULT_INDUSTRY:
        score += 1

    if factors.location_quality in (QualityBand.GOOD, QualityBand.EXCELLENT):
        score += 1

    if score >= 5:
        return ValuationConfidence.HIGH
    if score >= 3:
        return ValuationConfidence.MEDIUM
    return ValuationConfidence.LOW


def generate_valuation_factors(factors: ValuationFactors, multipliers: Dict[str, float]) -> List[ValuationFactor]:
    """
    Explain the valuation.

    Only a poor location produces a negative note; everything else is
    reported only when it helps.
    """
    result = []

    location = multipliers["location"]
    if location > 1.1:
        result.append(ValuationFactor(
            factor="Prime Location",
            impact=Impact.POSITIVE,
            description=f"Excellent location increases value by {round_half_up((location - 1) * 100)}%",
        ))
    elif location < 0.9:
        result.append(ValuationFactor(
            factor="Poor Location",
            impact=Impact.NEGATIVE,
            description=f"Below-average location reduces value by {round_half_up((1 - location) * 100)}%",
        ))

    if factors.rating and factors.rating >= 4.0 and factors.review_count and factors.review_count > 10:
        result.append(ValuationFactor(
            factor="Strong Reputation",
            impact=Impact.POSITIVE,
            description=f"High rating ({factors.rating}) with {factors.review_count} reviews adds premium",
        ))

    if factors.years_in_business and factors.years_in_business >= 5:
        result.append(ValuationFactor(
            factor="Established Business",
            impact=Impact.POSITIVE,
            description=f"{factors.years_in_business} years in business demonstrates stability",
        ))

    if factors.has_website and factors.web_presence_quality == QualityBand.EXCELLENT:
        result.append(ValuationFactor(
            factor="Strong Online Presence",
            impact=Impact.POSITIVE,
            description="Professional website and digital marketing increase value",
        ))

    if factors.equipment_quality == EquipmentBand.EXCELLENT:
        result.append(ValuationFactor(
            factor="Quality Equipment/Assets",
            impact=Impact.POSITIVE,
            description="High-quality equipment and fixtures add tangible value",
        ))

    return result


def generate_comparables(business_type: str) -> List[str]:
    category = (business_type or "").lower()

    if "restaurants & food" in category:
        return [
            "Local restaurants sold $40K-$120K",
            "Food service businesses $50K-$150K",
            "Quick service concepts premium 10-20%",
        ]

    if "retail" in category:
        return [
            "Small retail stores $30K-$80K",
            "Specialty retail $40K-$100K",
            "Prime location retail premium 30%",
        ]

    return [
        f"Similar {category} businesses in area",
        "Local market comparables",
        "Industry benchmark multiples",
    ]


def estimate_business_value(factors: ValuationFactors, log=logger) -> ValuationResult:
    """
    Estimate a business's sale value range from its valuation factors.

    Args:
        factors (ValuationFactors): Normalized valuation inputs.
        log: loguru logger; callers may pass a bound logger.

    Returns:
        ValuationResult: Low/mid/high range, confidence grade and rationale.
    """
    industry_key = find_industry_match(factors.business_type)
    base_value, industry_multiplier = INDUSTRY_MULTIPLIERS[industry_key]
    log.debug(f"📊 Base industry data for '{industry_key}': base={base_value}, multiplier={industry_multiplier}")

    multipliers = compute_multipliers(factors)
    value = float(base_value)
    for multiplier in multipliers.values():
        value *= multiplier

    mid = round_half_up(value)
    estimated = EstimatedValue(
        low=round_half_up(mid * LOW_RANGE),
        mid=mid,
        high=round_half_up(mid * HIGH_RANGE),
    )

    result = ValuationResult(
        estimated_value=estimated,
        confidence=calculate_confidence(factors),
        factors=generate_valuation_factors(factors, multipliers),
        methodology=(
            f"Valuation based on industry multiples for {industry_key} businesses, adjusted for "
            "location quality, reputation, business age, web presence and operational factors."
        ),
        comparables=generate_comparables(factors.business_type),
        multipliers={"industry": industry_multiplier, **multipliers},
    )

    log.debug(
        f"💰 Valuation completed: ${estimated.low:,} - ${estimated.high:,} "
        f"(confidence={result.confidence.value}, factors={len(result.factors)})"
    )
    return result
