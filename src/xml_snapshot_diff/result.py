"""Difference and DifferenceTrace: the output of one file-pair comparison.

This module provides the ordered trace of discrepancies returned by the
compare calls.  Entry order is discovery order: all entries found while
walking the first tree come before those found in the second tree.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

__all__ = ["Difference", "DifferenceTrace"]


@dataclass(frozen=True, slots=True)
class Difference:
    """One discrepancy between the two compared files.

    Attributes:
        description: What differs, e.g. ``"Presence of XML node <root><x>"``.
        this_value:  What the first file shows.
        that_value:  What the second file shows.
    """

    description: str
    this_value: str
    that_value: str

    def to_dict(self) -> dict[str, str]:
        return {
            "description": self.description,
            "this_value": self.this_value,
            "that_value": self.that_value,
        }


@dataclass(slots=True)
class DifferenceTrace:
    """Ordered discrepancies found while comparing two XML files.

    Attributes:
        first_snapshot:  Identifier of the snapshot (or endpoint) the first
            file belongs to.
        second_snapshot: Identifier of the snapshot (or endpoint) the second
            file belongs to.
        first_path:  Path of the first file, empty for in-memory documents.
        second_path: Path of the second file, empty for in-memory documents.
        differences: Entries in discovery order.
    """

    first_snapshot: str = "first"
    second_snapshot: str = "second"
    first_path: str = ""
    second_path: str = ""
    differences: list[Difference] = field(default_factory=list)

    def add_difference(
        self, description: str, this_value: str, that_value: str
    ) -> None:
        self.differences.append(Difference(description, this_value, that_value))

    @property
    def has_differences(self) -> bool:
        return bool(self.differences)

    def __len__(self) -> int:
        return len(self.differences)

    def __iter__(self) -> Iterator[Difference]:
        return iter(self.differences)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain ``dict`` for JSON serialization."""
        return {
            "first_snapshot": self.first_snapshot,
            "second_snapshot": self.second_snapshot,
            "first_path": self.first_path,
            "second_path": self.second_path,
            "differences": [d.to_dict() for d in self.differences],
        }
