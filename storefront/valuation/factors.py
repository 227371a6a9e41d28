from typing import List, Optional
from urllib.parse import urlparse

from loguru import logger

from storefront.models import (
    BusinessProfile,
    DirectoryRecord,
    EquipmentBand,
    ExtractionResult,
    HoursBand,
    QualityBand,
    SizeBand,
    ValuationFactors,
    WebRecord,
)
from storefront.rules import contains_any, first_match

PRIME_LOCATION_MARKERS = ("downtown", "main st", "center")
SOCIAL_HOSTS = ("facebook", "instagram", "twitter", "tiktok")

EQUIPMENT_RULES = [
    (contains_any("premium", "luxury", "professional"), EquipmentBand.EXCELLENT),
    (contains_any("quality", "modern"), EquipmentBand.GOOD),
]


def _review_count(directory: Optional[DirectoryRecord]) -> int:
    if directory is None:
        return 0
    return directory.user_ratings_total or 0


def assess_location_quality(address: Optional[str], directory: Optional[DirectoryRecord]) -> QualityBand:
    """Band the location from address markers, then the directory rating."""
    if not address:
        return QualityBand.POOR

    if any(marker in address.lower() for marker in PRIME_LOCATION_MARKERS):
        return QualityBand.EXCELLENT

    # Rating as a proxy for foot traffic
    rating = directory.rating if directory else None
    if rating is not None:
        if rating >= 4.5:
            return QualityBand.EXCELLENT
        if rating >= 4.0:
            return QualityBand.GOOD
        if rating >= 3.5:
            return QualityBand.AVERAGE

    return QualityBand.AVERAGE


def _host(website: str) -> str:
    parsed = urlparse(website if "://" in website else f"http://{website}")
    return (parsed.hostname or "").lower()


def assess_web_presence_quality(web: Optional[WebRecord], website: Optional[str]) -> QualityBand:
    if web is None or web.is_generic_fallback or not website:
        return QualityBand.POOR

    if web.description and len(web.description) > 200:
        return QualityBand.GOOD

    host = _host(website)
    if any(social in host for social in SOCIAL_HOSTS):
        return QualityBand.AVERAGE
    if host.endswith(".com"):
        return QualityBand.GOOD

    return QualityBand.AVERAGE


def estimate_years_in_business(directory: Optional[DirectoryRecord]) -> Optional[int]:
    """
    Guess business age from review volume.

    Lots of reviews suggests an established business; this is a weak proxy
    and returns None when there is nothing to go on.
    """
    reviews = _review_count(directory)
    if reviews > 100:
        return 8
    if reviews > 50:
        return 5
    if reviews > 20:
        return 3
    return None


def assess_equipment_quality(other_text: List[str]) -> EquipmentBand:
    text = " ".join(other_text or []).lower()
    return first_match(EQUIPMENT_RULES, text, default=EquipmentBand.AVERAGE)


def assess_business_size(directory: Optional[DirectoryRecord]) -> SizeBand:
    reviews = _review_count(directory)
    if reviews > 500:
        return SizeBand.LARGE
    if reviews > 100:
        return SizeBand.MEDIUM
    if reviews > 20:
        return SizeBand.SMALL
    return SizeBand.MICRO


def assess_operating_hours(weekday_text: Optional[List[str]]) -> HoursBand:
    if not weekday_text:
        return HoursBand.STANDARD

    hours_text = " ".join(weekday_text).lower()
    if "24" in hours_text or "midnight" in hours_text:
        return HoursBand.EXTENDED
    if hours_text.count("closed") > 2:
        return HoursBand.LIMITED

    return HoursBand.STANDARD


def derive_valuation_factors(
    profile: BusinessProfile,
    directory: Optional[DirectoryRecord],
    web: Optional[WebRecord],
    extraction: ExtractionResult,
    log=logger,
) -> ValuationFactors:
    """
    Map a business profile and its external records into valuation bands.

    Missing directory or web records fall back to default bands.

    Args:
        profile (BusinessProfile): Merged business identity.
        directory (Optional[DirectoryRecord]): Directory listing, if found.
        web (Optional[WebRecord]): Web search record, if any.
        extraction (ExtractionResult): OCR extraction for the image.

    Returns:
        ValuationFactors: Snapshot consumed by the valuation scorer.
    """
    factors = ValuationFactors(
        business_type=profile.business_type,
        location=profile.location,
        rating=profile.rating,
        review_count=profile.reviews,
        years_in_business=estimate_years_in_business(directory),
        has_website=bool(profile.website),
        web_presence_quality=assess_web_presence_quality(web, profile.website),
        location_quality=assess_location_quality(profile.address, directory),
        equipment_quality=assess_equipment_quality(extraction.other_text),
        business_size=assess_business_size(directory),
        operating_hours=assess_operating_hours(directory.weekday_text if directory else None),
    )
    log.debug(f"📊 Valuation factors: {factors}")
    return factors
