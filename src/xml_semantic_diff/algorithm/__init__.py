"""algorithm subpackage - public API for unordered XML comparison.

Provides element matching, the comparison walk, and its configuration.
Import from this module (not from sub-modules directly) to stay on the
stable public interface.  The classifier lives in
``xml_semantic_diff.algorithm.classifier`` because it depends on the result
types.

Example::

    from xml_semantic_diff.algorithm import ComparisonEngine, CompareConfig
    from xml_semantic_diff.tree import TreeBuilder

    builder = TreeBuilder()
    events = ComparisonEngine(config=CompareConfig()).compare(
        builder.parse_string("<root><a/><b/></root>"),
        builder.parse_string("<root><b/><a/></root>"),
    )
"""

from __future__ import annotations

from xml_semantic_diff.algorithm.config import CompareConfig, MatchStrategy
from xml_semantic_diff.algorithm.engine import ComparisonEngine
from xml_semantic_diff.algorithm.events import (
    NOISE_KINDS,
    ComparisonEvent,
    ComparisonKind,
    ComparisonOutcome,
    Side,
)
from xml_semantic_diff.algorithm.matcher import MatchResult, NodeMatch, NodeMatcher
from xml_semantic_diff.algorithm.selectors import (
    ByName,
    ByNameAndAllAttributes,
    ElementSelector,
)

__all__ = [
    "NOISE_KINDS",
    "ByName",
    "ByNameAndAllAttributes",
    "CompareConfig",
    "ComparisonEngine",
    "ComparisonEvent",
    "ComparisonKind",
    "ComparisonOutcome",
    "ElementSelector",
    "MatchResult",
    "MatchStrategy",
    "NodeMatch",
    "NodeMatcher",
    "Side",
]
