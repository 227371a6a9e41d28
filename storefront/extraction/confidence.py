from typing import List

from storefront.models import ExtractionConfidence, Grade

BASE_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.95
ADDRESS_FACTOR = 0.8
PHONE_FACTOR = 0.7


def confidence_score(detection_count: int, business_names: List[str], full_text: str) -> float:
    """
    Aggregate OCR signal quality into one scalar in [0.5, 0.95].

    Args:
        detection_count (int): Number of OCR text detections.
        business_names (List[str]): Names that survived ranking.
        full_text (str): Full OCR text.

    Returns:
        float: Underlying extraction confidence.
    """
    confidence = BASE_CONFIDENCE

    if detection_count > 5:
        confidence += 0.1
    if detection_count > 10:
        confidence += 0.1

    if len(business_names) > 0:
        confidence += 0.2
    if len(business_names) > 1:
        confidence += 0.1

    if len((full_text or "").split()) >= 5:
        confidence += 0.1

    return min(MAX_CONFIDENCE, confidence)


def grade_for(score: float) -> Grade:
    if score > 0.7:
        return Grade.HIGH
    if score > 0.5:
        return Grade.MEDIUM
    return Grade.LOW


def estimate_confidence(detection_count: int, business_names: List[str], full_text: str) -> ExtractionConfidence:
    """Grade name, address and phone extraction from one shared score."""
    score = confidence_score(detection_count, business_names, full_text)
    return ExtractionConfidence(
        business_name=grade_for(score),
        address=grade_for(score * ADDRESS_FACTOR),
        phone=grade_for(score * PHONE_FACTOR),
    )
