"""
Ordered extraction cascades.

A cascade is a list of pure rules evaluated in order. Each rule yields
zero or more raw candidates from the text; the first candidate accepted
by the caller's validator wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional


@dataclass(frozen=True)
class Rule:
    """One step of a cascade."""
    label: str
    find: Callable[[str], Iterable[str]]
    strict: bool = True  # apply the full validation (unanchored heuristics)


@dataclass(frozen=True)
class CascadeMatch:
    """Accepted value plus the rule that produced it."""
    value: str
    rule: str


def first_match(
    rules: List[Rule],
    text: str,
    accept: Callable[[str, Rule], Optional[str]],
    logger: Optional[logging.Logger] = None,
) -> Optional[CascadeMatch]:
    """
    Run the cascade over `text`.

    Args:
        rules: Rules in priority order
        text: Input text
        accept: Returns the cleaned value for a valid candidate, else None
        logger: Optional logger for rule hits (DEBUG)

    Returns:
        The first accepted match, or None when every rule misses
    """
    for rule in rules:
        for candidate in rule.find(text):
            value = accept(candidate, rule)
            if value:
                if logger:
                    logger.debug(f"{rule.label}: {candidate!r} -> {value!r}")
                return CascadeMatch(value=value, rule=rule.label)
    return None
