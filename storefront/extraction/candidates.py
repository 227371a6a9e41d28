import re
from typing import List

from loguru import logger

from storefront.models import NameCandidate, Strategy
from storefront.rules import contains_all, first_match

# Word groups that signal a business heading, checked in priority order
BUSINESS_INDICATORS = [
    ("food", "park"),
    ("coffee", "shop"),
    ("restaurant",),
    ("market",),
    ("center",),
    ("plaza",),
    ("cafe",),
    ("grill",),
    ("bar",),
]
INDICATOR_RULES = [(contains_all(*words), words) for words in BUSINESS_INDICATORS]

NAME_PATTERNS = [
    re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+$"),  # Proper case two words
    re.compile(r"^[A-Z]+ [A-Z]+$"),  # All caps two words
    re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+ [A-Z][a-z]+$"),
    re.compile(r"^[A-Z]+ [A-Z]+ [A-Z]+$"),
]
PATTERN_RULES = [(pattern.match, pattern.pattern) for pattern in NAME_PATTERNS]

CONTEXT_MAX_LINES = 4
CONTEXT_MAX_LENGTH = 50
POSITIONAL_LINES = 5
PATTERN_MAX_LENGTH = 35


def _windows(lines: List[str], min_size: int, max_size: int):
    """Yield space-joined windows of contiguous lines, grouped by start index."""
    for start in range(len(lines)):
        for size in range(min_size, max_size + 1):
            if start + size > len(lines):
                break
            yield " ".join(lines[start:start + size])


def context_candidates(lines: List[str], log=logger) -> List[str]:
    """
    Emit windows of 1-4 lines that contain a business indicator word group.

    Args:
        lines (List[str]): Preprocessed lines.

    Returns:
        List[str]: Candidates in window order, at most one per window.
    """
    candidates = []
    for combined in _windows(lines, 1, CONTEXT_MAX_LINES):
        if len(combined) >= CONTEXT_MAX_LENGTH:
            continue
        words = first_match(INDICATOR_RULES, combined.lower())
        if words:
            log.debug(f"✓ Context match: '{combined}' ({' + '.join(words)})")
            candidates.append(combined)
    return candidates


def positional_candidates(lines: List[str]) -> List[str]:
    """Emit short lines and 2/3-line joins from the top of the sign."""
    candidates = []
    for i in range(min(len(lines), POSITIONAL_LINES)):
        line = lines[i]
        if 4 <= len(line) <= 15:
            candidates.append(line)

        if i + 1 < len(lines):
            combined = f"{lines[i]} {lines[i + 1]}"
            if len(combined) <= 30:
                candidates.append(combined)

        if i + 2 < len(lines):
            combined = f"{lines[i]} {lines[i + 1]} {lines[i + 2]}"
            if len(combined) <= 40:
                candidates.append(combined)
    return candidates


def pattern_candidates(lines: List[str], log=logger) -> List[str]:
    """Emit 2-3 line windows shaped like two or three capitalized words."""
    candidates = []
    for combined in _windows(lines, 2, 3):
        if len(combined) > PATTERN_MAX_LENGTH:
            continue
        pattern = first_match(PATTERN_RULES, combined)
        if pattern:
            log.debug(f"✓ Pattern match: '{combined}'")
            candidates.append(combined)
    return candidates


def generate_candidates(lines: List[str], log=logger) -> List[NameCandidate]:
    """
    Run all three strategies over the preprocessed lines.

    Candidates keep generation order (context, positional, pattern), which
    deduplication relies on.
    """
    candidates = [NameCandidate(name, Strategy.CONTEXT) for name in context_candidates(lines, log=log)]
    candidates += [NameCandidate(name, Strategy.POSITIONAL) for name in positional_candidates(lines)]
    candidates += [NameCandidate(name, Strategy.PATTERN) for name in pattern_candidates(lines, log=log)]
    return candidates
