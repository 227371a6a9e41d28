import re
from typing import List

# Whole-line words that are signage boilerplate rather than names
STOP_LINES = {"our", "menu", "hours", "open", "closed", "welcome", "visit", "call", "phone", "email"}

_DIGITS_ONLY = re.compile(r"^\d+$")
_HAS_LETTER = re.compile(r"[a-zA-Z]")


def split_lines(text: str) -> List[str]:
    """Split raw OCR text into trimmed, non-empty lines in reading order."""
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def _keep_line(line: str) -> bool:
    lower = line.lower()
    return (
        len(line) > 1
        and lower not in STOP_LINES
        and not lower.startswith("www")
        and not lower.startswith("http")
        and "@" not in lower
        and not _DIGITS_ONLY.match(line)
        and line != "&"
        and line != "-"
        and bool(_HAS_LETTER.search(line))
    )


def preprocess_lines(lines: List[str]) -> List[str]:
    """
    Clean OCR lines into the ordered list name candidates are built from.

    Lines are trimmed and noise (numbers, URLs, emails, lone punctuation,
    boilerplate words) is dropped. Order is preserved.

    Args:
        lines (List[str]): Raw OCR lines, top to bottom.

    Returns:
        List[str]: Surviving lines in their original order.
    """
    stripped = (line.strip() for line in lines)
    return [line for line in stripped if line and _keep_line(line)]
