"""DifferenceRecord and ComparisonResult: the output of an XML comparison.

This module provides the rich result type returned by compare() calls.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from xml_semantic_diff.algorithm.events import ComparisonKind

__all__ = ["ComparisonResult", "DifferenceCategory", "DifferenceRecord"]


class DifferenceCategory(StrEnum):
    """Taxonomy of reported differences.

    - ATTRIBUTE:           An attribute present on one side only.
    - ATTRIBUTE_VALUE:     An attribute whose value changed on a paired element.
    - VALUE:               Text content changed.
    - STRUCTURE_MISSING:   A control element has no counterpart in the test
                           document.
    - STRUCTURE_EXTRA:     A test element has no counterpart in the control
                           document.
    - STRUCTURE_UNMATCHED: An element exists on both sides but could not be
                           paired (usually an attribute or value change).
    - STRUCTURE_OTHER:     Any other structural difference (prolog, ...).
    """

    ATTRIBUTE = auto()
    ATTRIBUTE_VALUE = auto()
    VALUE = auto()
    STRUCTURE_MISSING = auto()
    STRUCTURE_EXTRA = auto()
    STRUCTURE_UNMATCHED = auto()
    STRUCTURE_OTHER = auto()


@dataclass(frozen=True, slots=True)
class DifferenceRecord:
    """One reported difference.

    Attributes:
        category:     Where the difference falls in the taxonomy.
        message:      Fully rendered, human-readable description.
        kind:         The comparison kind the difference came from.
        control_path: Control-side location, or None.
        test_path:    Test-side location, or None.
    """

    category: DifferenceCategory
    message: str
    kind: ComparisonKind
    control_path: str | None = None
    test_path: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Rich result of a compare() call.

    Attributes:
        differences: Reported differences in the order the tree walk
            discovered them.  Empty when the documents are equivalent.
        control_source: Logical path of the control document.
        test_source: Logical path of the test document.
        computation_time_ms: Wall-clock duration of the comparison in
            milliseconds (parsing included, loading excluded).
    """

    differences: tuple[DifferenceRecord, ...]
    control_source: str
    test_source: str
    computation_time_ms: float

    def is_equivalent(self) -> bool:
        """True when no difference was found."""
        return not self.differences

    @property
    def messages(self) -> list[str]:
        """The rendered message of every difference, in order."""
        return [record.message for record in self.differences]

    def by_category(self, category: DifferenceCategory) -> list[DifferenceRecord]:
        return [record for record in self.differences if record.category == category]

    def __len__(self) -> int:
        return len(self.differences)

    def __iter__(self) -> Iterator[DifferenceRecord]:
        return iter(self.differences)
