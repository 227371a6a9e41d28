# storefront/orchestrator.py

import asyncio
from dataclasses import replace

from loguru import logger

from storefront.clients import VisionClient
from storefront.directory_fetcher import search_business
from storefront.extraction import extract_business_identity
from storefront.models import BusinessProfile, ExtractionResult
from storefront.profile import UNKNOWN_BUSINESS, build_business_profile
from storefront.valuation import derive_valuation_factors, estimate_business_value
from storefront.web_search import search_business_on_web


async def process_business(extraction: ExtractionResult, log=logger) -> BusinessProfile:
    """
    Look the extracted business up, merge what was found and value it.

    Directory and web lookups run concurrently; either may fail or find
    nothing without affecting the other, and valuation proceeds on defaults.

    Args:
        extraction (ExtractionResult): OCR extraction for one image.
        log: loguru logger; callers may pass a bound logger.

    Returns:
        BusinessProfile: Merged profile with its valuation attached.
    """
    business_name = extraction.business_names[0] if extraction.business_names else UNKNOWN_BUSINESS
    address = extraction.addresses[0] if extraction.addresses else None
    log.debug(f"🔍 Running analysis for '{business_name}'")

    directory, web = await asyncio.gather(
        search_business(business_name, address, log=log),
        search_business_on_web(business_name, log=log),
        return_exceptions=True,
    )
    if isinstance(directory, Exception):
        log.debug(f"Directory lookup failed: {directory}")
        directory = None
    if isinstance(web, Exception):
        log.debug(f"Web search failed: {web}")
        web = None

    profile = build_business_profile(extraction, directory, web)
    factors = derive_valuation_factors(profile, directory, web, extraction, log=log)
    valuation = estimate_business_value(factors, log=log)

    sources = [name for name, record in (("directory", directory), ("web", web)) if record] + ["ocr"]
    log.info(
        f"🎉 {profile.business_name} ({profile.business_type}): "
        f"${valuation.estimated_value.low:,} - ${valuation.estimated_value.high:,}, "
        f"confidence={valuation.confidence.value}, sources={sources}"
    )
    return replace(profile, valuation=valuation)


async def analyze_image(image_bytes: bytes, log=logger) -> BusinessProfile:
    """
    Run the full pipeline for one storefront photo.

    Raises:
        NoTextDetectedError: If OCR found no text in the image.
    """
    block = await VisionClient().detect_text(image_bytes, log=log)
    extraction = extract_business_identity(block, log=log)
    return await process_business(extraction, log=log)
