"""MatcherConfig and MatchingMode for tree matcher configuration.

MatcherConfig is a frozen (immutable) dataclass holding the matcher
parameters.  MatchingMode selects how sibling elements are paired:
greedy first-match (default) or optimal assignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class MatchingMode(StrEnum):
    """How sibling elements with equal signatures are paired.

    - GREEDY:  Earliest unvisited candidate in document order wins, no backtracking.
    - OPTIMAL: Minimum-cost assignment preferring pairs with equal content.
    """

    GREEDY = auto()
    OPTIMAL = auto()


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Immutable configuration for the tree matcher.

    Attributes:
        matching_mode: Sibling pairing strategy.
        ignore_case: When True (default), signatures, contents and texts are
            compared case-insensitively.  Values are always whitespace-trimmed.
        max_cache_size: Maximum number of serialized subtree contents kept in
            memory per tree during one comparison (> 0).
    """

    matching_mode: MatchingMode = MatchingMode.GREEDY
    ignore_case: bool = True
    max_cache_size: int = 1024

    def __post_init__(self) -> None:
        if not isinstance(self.matching_mode, MatchingMode):
            msg = f"matching_mode must be a MatchingMode, got {self.matching_mode!r}"
            raise TypeError(msg)
        if self.max_cache_size <= 0:
            msg = f"max_cache_size must be > 0, got {self.max_cache_size}"
            raise ValueError(msg)

    def normalize(self, value: str) -> str:
        """Return the comparison key of ``value``."""
        value = value.strip()
        return value.lower() if self.ignore_case else value
