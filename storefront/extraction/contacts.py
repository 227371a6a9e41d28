import re
from typing import List

ADDRESS_RE = re.compile(
    r"\d+\s+[A-Za-z\s]+(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr|Way|Court|Ct)",
    re.IGNORECASE,
)
PHONE_RE = re.compile(r"(?:\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")
WEBSITE_RE = re.compile(r"(?:https?://)?(?:www\.)?[a-zA-Z0-9][a-zA-Z0-9-]{1,61}[a-zA-Z0-9]\.[a-zA-Z]{2,}")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def _matches(pattern: re.Pattern, text: str) -> List[str]:
    # Whole matches; findall would return the capture groups instead
    return [m.group(0) for m in pattern.finditer(text or "")]


def extract_addresses(text: str) -> List[str]:
    return _matches(ADDRESS_RE, text)


def extract_phone_numbers(text: str) -> List[str]:
    return _matches(PHONE_RE, text)


def extract_websites(text: str) -> List[str]:
    return _matches(WEBSITE_RE, text)


def extract_emails(text: str) -> List[str]:
    return _matches(EMAIL_RE, text)


def extract_other_text(text: str, phones: List[str], websites: List[str], emails: List[str]) -> List[str]:
    """Lines that carry none of the extracted phones, websites or emails."""
    contacts = [*phones, *websites, *emails]
    lines = [line.strip() for line in (text or "").split("\n")]
    return [line for line in lines if line and not any(c in line for c in contacts)]
