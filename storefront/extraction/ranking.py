import re
from typing import List

from loguru import logger

from storefront.config import MAX_BUSINESS_NAMES
from storefront.models import NameCandidate
from storefront.rules import first_match

# Checked in order, first hit only
KEYWORD_BONUSES = [
    ("food park", 8),
    ("coffee shop", 7),
    ("restaurant", 6),
    ("market", 5),
    ("center", 4),
    ("plaza", 4),
    ("cafe", 5),
    ("grill", 5),
    ("bar", 4),
]
KEYWORD_RULES = [(lambda text, word=word: word in text, points) for word, points in KEYWORD_BONUSES]

_STARTS_UPPER = re.compile(r"^[A-Z]")
_SIGNAGE_CAPS = re.compile(r"^[A-Z\s&\-'.]+$")


def score_candidate(name: str, position: int) -> float:
    """
    Score a business name candidate.

    Args:
        name (str): Candidate text.
        position (int): Line index of the candidate's first word.

    Returns:
        float: Non-negative score; higher is more name-like.
    """
    score = max(0, 10 - position)

    words = name.split(" ")
    if len(words) == 2:
        score += 5
    elif len(words) == 3:
        score += 4
    elif len(words) == 1 and len(name) > 4:
        score += 3

    if _STARTS_UPPER.match(name):
        score += 2
    if _SIGNAGE_CAPS.match(name):
        score += 3

    score += first_match(KEYWORD_RULES, name.lower(), default=0)

    if 8 <= len(name) <= 25:
        score += 3

    if len(name) < 4:
        score -= 3
    if len(name) > 40:
        score -= 5

    return max(0, score)


def candidate_position(name: str, lines: List[str]) -> int:
    """Index of the first line holding the candidate's first word, 0 if none does."""
    first_word = name.split(" ")[0]
    for index, line in enumerate(lines):
        if first_word in line.split(" "):
            return index
    return 0


def remove_similar_candidates(candidates: List[NameCandidate]) -> List[NameCandidate]:
    """
    Drop candidates that contain, or are contained in, an earlier accepted one.

    Acceptance follows input order, so a short name generated first will
    shadow a longer, more specific one generated later.
    """
    unique: List[NameCandidate] = []
    for candidate in candidates:
        text = candidate.name.lower()
        is_duplicate = any(
            existing.name.lower() in text or text in existing.name.lower()
            for existing in unique
        )
        if not is_duplicate:
            unique.append(candidate)
    return unique


def rank_candidates(
    candidates: List[NameCandidate],
    lines: List[str],
    limit: int = MAX_BUSINESS_NAMES,
    log=logger,
) -> List[str]:
    """
    Score, deduplicate and rank name candidates.

    Args:
        candidates (List[NameCandidate]): Candidates in generation order.
        lines (List[str]): Preprocessed lines the candidates were built from.
        limit (int): Maximum number of names returned.

    Returns:
        List[str]: Best names first; ties keep generation order.
    """
    for candidate in candidates:
        candidate.score = score_candidate(candidate.name, candidate_position(candidate.name, lines))
        log.debug(f"  '{candidate.name}' ({candidate.strategy.value}): {candidate.score:.2f}")

    unique = remove_similar_candidates(candidates)
    unique.sort(key=lambda c: c.score, reverse=True)
    return [c.name for c in unique[:limit]]
