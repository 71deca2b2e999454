"""CompareConfig and MatchStrategy for XML comparison configuration.

CompareConfig is a frozen (immutable) dataclass holding the comparison
parameters.  MatchStrategy selects which element selector pairs children
across the two trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class MatchStrategy(StrEnum):
    """How child elements are paired across the control and test trees.

    - STRICT: Equal tag name and equal complete attribute set.  An element
              with any attribute difference is reported as a lookup failure.
    - NAME:   Equal tag name only.  Attribute differences are reported per
              attribute on the paired elements.
    """

    STRICT = auto()
    NAME = auto()


@dataclass(frozen=True, slots=True)
class CompareConfig:
    """Immutable configuration for XML comparison.

    Attributes:
        match_strategy: Which element selector pairs children.
        normalize_whitespace: When True, text is trimmed and internal
            whitespace runs collapsed before comparison, so whitespace-only
            changes are not differences.  Default True.
        compare_prolog: When True, the XML declaration (version, standalone)
            and DOCTYPE are compared.  Default True.
        max_text_preview: Longest text or value rendered verbatim in a
            difference message; longer values are truncated.  Must be > 0.
    """

    match_strategy: MatchStrategy = MatchStrategy.STRICT
    normalize_whitespace: bool = True
    compare_prolog: bool = True
    max_text_preview: int = 200

    def __post_init__(self) -> None:
        if not isinstance(self.match_strategy, MatchStrategy):
            msg = f"match_strategy must be a MatchStrategy, got {self.match_strategy!r}"
            raise ValueError(msg)
        if self.max_text_preview <= 0:
            msg = f"max_text_preview must be > 0, got {self.max_text_preview}"
            raise ValueError(msg)
