"""OCR text to business identity extraction."""
from storefront.extraction.extractor import NoTextDetectedError, extract_business_identity, extract_business_names

__all__ = ["NoTextDetectedError", "extract_business_identity", "extract_business_names"]
