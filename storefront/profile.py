from typing import List, Optional

from storefront.models import BusinessProfile, DirectoryRecord, ExtractionResult, WebRecord
from storefront.valuation.categories import categorize_business_industry

UNKNOWN_BUSINESS = "Unknown Business"

CATEGORY_BLURBS = {
    "Restaurants & Food": "This established restaurant offers quality dining with fresh ingredients and excellent customer service. ",
    "Retail": "This retail establishment serves customers with a wide selection of quality products and personalized service. ",
    "Health Care & Fitness": "This healthcare business provides professional services with a focus on customer care and quality outcomes. ",
    "Beauty & Personal Care": "This beauty and personal care business offers professional services in a comfortable environment. ",
    "Automotive & Boat": "This automotive business provides reliable services with experienced technicians and quality parts. ",
}
DEFAULT_BLURB = "This established business serves the local community with quality services and professional expertise. "


def _first(*values) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def _head(values: List[str]) -> Optional[str]:
    return values[0] if values else None


def extract_city_state(address: Optional[str]) -> Optional[str]:
    """'123 Main St, Springfield, IL 62701, USA' -> 'IL 62701'; None for short addresses."""
    if not address:
        return None
    parts = [part.strip() for part in address.split(",")]
    if len(parts) >= 3:
        return parts[-2]
    return None


def format_business_hours(weekday_text: List[str]) -> Optional[str]:
    return ", ".join(weekday_text) if weekday_text else None


def generate_business_description(
    business_name: str,
    business_type: str,
    location: Optional[str],
    directory: Optional[DirectoryRecord],
) -> str:
    description = f"{business_name} is a {business_type.lower()}"
    if location:
        description += f" located in {location}"
    description += ". "

    description += CATEGORY_BLURBS.get(business_type, DEFAULT_BLURB)

    if directory and directory.rating and directory.user_ratings_total:
        description += f"With a {directory.rating}-star rating based on {directory.user_ratings_total} customer reviews, "

    if directory and directory.business_status == "OPERATIONAL":
        description += "the business is currently operating and actively serving customers. "

    description += (
        f"{business_name} represents a solid business opportunity with established operations "
        "and a proven track record in the community."
    )
    return description


def build_business_profile(
    extraction: ExtractionResult,
    directory: Optional[DirectoryRecord] = None,
    web: Optional[WebRecord] = None,
) -> BusinessProfile:
    """
    Merge OCR, directory and web data into one business profile.

    Directory fields win over web fields, which win over what was read off
    the sign. Either external record may be missing.

    Args:
        extraction (ExtractionResult): OCR extraction for the image.
        directory (Optional[DirectoryRecord]): Directory listing, if found.
        web (Optional[WebRecord]): Web search record, if any.

    Returns:
        BusinessProfile: Profile without a valuation attached.
    """
    business_name = _first(
        directory.name if directory else None,
        web.name if web else None,
        _head(extraction.business_names),
    ) or UNKNOWN_BUSINESS

    type_text = _first(
        directory.name if directory else None,
        web.business_type if web else None,
    ) or "Business"
    business_type = categorize_business_industry(type_text, directory.types if directory else None)

    location = extract_city_state(_first(
        directory.formatted_address if directory else None,
        web.address if web else None,
    ))

    return BusinessProfile(
        business_name=business_name,
        business_type=business_type,
        description=generate_business_description(business_name, business_type, location, directory),
        address=_first(
            directory.formatted_address if directory else None,
            web.address if web else None,
            _head(extraction.addresses),
        ),
        phone=_first(
            directory.phone if directory else None,
            web.phone if web else None,
            _head(extraction.phone_numbers),
        ),
        website=_first(
            directory.website if directory else None,
            web.website if web else None,
            _head(extraction.websites),
        ),
        email=_head(extraction.emails),
        location=location,
        hours=format_business_hours(directory.weekday_text) if directory else None,
        rating=directory.rating if directory else None,
        reviews=directory.user_ratings_total if directory else None,
    )
