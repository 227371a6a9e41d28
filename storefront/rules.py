"""
Ordered rule tables.

Keyword bonuses, indicator groups and category lookups are all lists of
(predicate, result) pairs where the first matching rule wins.
"""
from typing import Callable, Iterable, Optional, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Rule = Tuple[Callable[[T], bool], R]


def first_match(rules: Iterable[Rule], value: T, default: Optional[R] = None) -> Optional[R]:
    """
    Evaluate rules in order and return the result of the first whose predicate
    accepts `value`.

    Args:
        rules: Ordered (predicate, result) pairs.
        value: Value handed to every predicate.
        default: Returned when no rule matches.

    Returns:
        The first matching result, or `default`.
    """
    for predicate, result in rules:
        if predicate(value):
            return result
    return default


def contains_all(*words: str) -> Callable[[str], bool]:
    """Predicate: lowercase text contains every word."""
    return lambda text: all(word in text for word in words)


def contains_any(*words: str) -> Callable[[str], bool]:
    """Predicate: lowercase text contains at least one word."""
    return lambda text: any(word in text for word in words)
