"""Raw comparison events emitted by the ComparisonEngine.

An event records one observation made while walking two trees: what kind
of comparison was made, how it came out, and where on each side it was
made.  Events are plain values; classifying and rendering them is the
classifier's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xml_semantic_diff.tree.nodes import XmlNode, XmlTree

__all__ = [
    "NOISE_KINDS",
    "ComparisonEvent",
    "ComparisonKind",
    "ComparisonOutcome",
    "Side",
]


class ComparisonKind(StrEnum):
    """What was being compared when an event was emitted."""

    NODE_TYPE = auto()
    ATTR_VALUE = auto()
    ATTR_MISSING = auto()
    TEXT_VALUE = auto()
    CHILD_LOOKUP = auto()
    CHILD_LIST_LENGTH = auto()
    CHILD_LIST_SEQUENCE = auto()
    SCHEMA_LOCATION = auto()
    NO_NAMESPACE_SCHEMA_LOCATION = auto()
    NAMESPACE_PREFIX = auto()
    XML_VERSION = auto()
    XML_STANDALONE = auto()
    DOCTYPE = auto()
    OTHER = auto()


class ComparisonOutcome(StrEnum):
    """How a comparison came out.

    - EQUAL:     No difference.
    - SIMILAR:   A difference that does not affect equivalence (e.g.
                 whitespace only, sibling order).
    - DIFFERENT: A real difference.
    """

    EQUAL = auto()
    SIMILAR = auto()
    DIFFERENT = auto()


# Kinds that only reflect order, cardinality, node category or schema
# hints.  They never become differences.
NOISE_KINDS: frozenset[ComparisonKind] = frozenset(
    {
        ComparisonKind.NODE_TYPE,
        ComparisonKind.CHILD_LIST_LENGTH,
        ComparisonKind.CHILD_LIST_SEQUENCE,
        *(kind for kind in ComparisonKind if "schema" in kind.value),
    }
)


@dataclass(frozen=True, slots=True)
class Side:
    """One side (control or test) of a comparison.

    Attributes:
        path:   Location of the compared item, or None when it does not
                exist on this side.
        tree:   Tree holding ``target``; None when there is no target.
        target: Arena index of the compared node, or None.
        value:  The compared value (text, attribute value, count, ...).
    """

    path: str | None = None
    tree: XmlTree | None = None
    target: int | None = None
    value: Any = None

    @property
    def node(self) -> XmlNode | None:
        if self.tree is None or self.target is None:
            return None
        return self.tree.node(self.target)

    @classmethod
    def of(cls, tree: XmlTree, node: XmlNode | None, value: Any = None) -> Side:
        """Side targeting ``node`` (or an empty side when ``node`` is None)."""
        if node is None:
            return cls(value=value)
        return cls(path=node.path, tree=tree, target=node.index, value=value)


@dataclass(frozen=True, slots=True)
class ComparisonEvent:
    """A single observation from the tree walk.

    Attributes:
        kind:    What was compared.
        outcome: How it came out.
        control: Control-side location and value.
        test:    Test-side location and value.
        detail:  Extra context, e.g. the attribute name for ATTR_VALUE.
    """

    kind: ComparisonKind
    outcome: ComparisonOutcome
    control: Side
    test: Side
    detail: str = ""
