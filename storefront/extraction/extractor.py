from loguru import logger

from storefront.models import ExtractionResult, RawTextBlock
from storefront.extraction.candidates import generate_candidates
from storefront.extraction.confidence import estimate_confidence
from storefront.extraction.contacts import (
    extract_addresses,
    extract_emails,
    extract_other_text,
    extract_phone_numbers,
    extract_websites,
)
from storefront.extraction.preprocess import preprocess_lines, split_lines
from storefront.extraction.ranking import rank_candidates


class NoTextDetectedError(Exception):
    """Raised when OCR found no text in the image."""


def extract_business_names(full_text: str, log=logger) -> list:
    """
    Rank the most likely business names on a sign.

    Args:
        full_text (str): Full OCR text.
        log: loguru logger used for candidate tracing.

    Returns:
        list: Up to three names, best first.
    """
    lines = preprocess_lines(split_lines(full_text))
    log.debug(f"Cleaned lines: {lines}")

    candidates = generate_candidates(lines, log=log)
    names = rank_candidates(candidates, lines, log=log)
    log.debug(f"🎯 Final business names: {names}")
    return names


def extract_business_identity(block: RawTextBlock, log=logger) -> ExtractionResult:
    """
    Turn one OCR text block into a structured business identity.

    Args:
        block (RawTextBlock): OCR output for one image.
        log: loguru logger; callers may pass a bound logger.

    Returns:
        ExtractionResult: Names, contact details, leftover text and confidence.

    Raises:
        NoTextDetectedError: If the OCR reported zero detections.
    """
    if block.detection_count == 0:
        log.debug("❌ No text detected in image")
        raise NoTextDetectedError("No text detected in image")

    text = block.full_text or ""
    log.debug(f"📄 Raw OCR text: {text!r} ({block.detection_count} detections)")

    business_names = extract_business_names(text, log=log)
    phone_numbers = extract_phone_numbers(text)
    websites = extract_websites(text)
    emails = extract_emails(text)

    result = ExtractionResult(
        business_names=business_names,
        addresses=extract_addresses(text),
        phone_numbers=phone_numbers,
        websites=websites,
        emails=emails,
        other_text=extract_other_text(text, phone_numbers, websites, emails),
        confidence=estimate_confidence(block.detection_count, business_names, text),
    )
    log.debug(f"📊 Extraction confidence: {result.confidence}")
    return result
