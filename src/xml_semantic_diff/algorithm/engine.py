"""ComparisonEngine: depth-first walk of two matched XML trees.

The engine turns a control/test tree pair into a flat tuple of
``ComparisonEvent`` values.  It never raises for a difference and never
filters: noise events (sibling order, child counts, schema locations, ...)
are emitted alongside real differences and left to the classifier.

Architecture:
- Document level: the prolog (XML version, standalone flag, DOCTYPE) is
  compared, then the two roots are matched like one-element child lists.
  A DOCTYPE present on one side only, or differing only in its system id,
  is SIMILAR.
- Element pairs: attributes, node category, direct text, child count, then
  the children, in that order.
- Children: walked in control document order.  Paired children recurse;
  rejected or absent children produce CHILD_LOOKUP events.  Test children
  with no partner are reported after all control children of the same
  parent.

Every walk method is a generator; ``compare`` folds them into a tuple, so
event order is exactly the encounter order of a single traversal.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from xml_semantic_diff.algorithm.config import CompareConfig
from xml_semantic_diff.algorithm.events import (
    ComparisonEvent,
    ComparisonKind,
    ComparisonOutcome,
    Side,
)
from xml_semantic_diff.algorithm.matcher import MatchResult, NodeMatch, NodeMatcher
from xml_semantic_diff.algorithm.selectors import (
    NO_NAMESPACE_SCHEMA_LOCATION,
    SCHEMA_ATTRIBUTES,
    SCHEMA_LOCATION,
    selector_for,
)
from xml_semantic_diff.tree.normalizer import TextNormalizer

if TYPE_CHECKING:
    from xml_semantic_diff.algorithm.selectors import ElementSelector
    from xml_semantic_diff.tree.nodes import Doctype, XmlNode, XmlTree

__all__ = ["ComparisonEngine"]

_SCHEMA_KINDS = (
    (SCHEMA_LOCATION, ComparisonKind.SCHEMA_LOCATION),
    (NO_NAMESPACE_SCHEMA_LOCATION, ComparisonKind.NO_NAMESPACE_SCHEMA_LOCATION),
)

_DIFFERENT = ComparisonOutcome.DIFFERENT
_SIMILAR = ComparisonOutcome.SIMILAR

_blank_check = TextNormalizer()


class ComparisonEngine:
    """Walks two XML trees and emits comparison events.

    Example::

        engine = ComparisonEngine()
        events = engine.compare(control_tree, test_tree)
        kinds = [e.kind for e in events]
    """

    def __init__(
        self,
        selector: ElementSelector | None = None,
        config: CompareConfig | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            selector: Element pairing policy.  Defaults to the selector for
                ``config.match_strategy``.
            config:   Comparison parameters.  Defaults to ``CompareConfig()``.
        """
        self._config = config if config is not None else CompareConfig()
        if selector is None:
            selector = selector_for(self._config.match_strategy)
        self._selector = selector

    @property
    def selector(self) -> ElementSelector:
        return self._selector

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(
        self,
        control_tree: XmlTree,
        test_tree: XmlTree,
        matcher: NodeMatcher | None = None,
    ) -> tuple[ComparisonEvent, ...]:
        """Compare two trees and return every event in encounter order.

        Args:
            control_tree: Tree of the expected document.
            test_tree:    Tree of the actual document.
            matcher:      Matcher bound to these two trees.  Built from the
                engine's selector when None.
        """
        if matcher is None:
            matcher = NodeMatcher(
                control_tree,
                test_tree,
                self._selector,
                normalize_whitespace=self._config.normalize_whitespace,
            )
        return tuple(self._walk_document(control_tree, test_tree, matcher))

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def _walk_document(
        self, ct: XmlTree, tt: XmlTree, matcher: NodeMatcher
    ) -> Iterator[ComparisonEvent]:
        if self._config.compare_prolog:
            for kind, control_value, test_value in (
                (ComparisonKind.XML_VERSION, ct.xml_version, tt.xml_version),
                (ComparisonKind.XML_STANDALONE, ct.standalone, tt.standalone),
            ):
                if control_value != test_value:
                    yield ComparisonEvent(
                        kind,
                        _DIFFERENT,
                        Side(path="/", value=control_value),
                        Side(path="/", value=test_value),
                    )
            yield from _walk_doctype(ct.doctype, tt.doctype)

        yield from self._walk_children(
            ct, tt, [ct.root], matcher.match_roots(), matcher
        )

    # ------------------------------------------------------------------
    # Element pairs
    # ------------------------------------------------------------------

    def _walk_pair(
        self, ct: XmlTree, tt: XmlTree, match: NodeMatch, matcher: NodeMatcher
    ) -> Iterator[ComparisonEvent]:
        c, t = match.control, match.test

        yield from self._walk_attributes(ct, c, tt, t)

        c_children = ct.child_elements(c)
        t_children = tt.child_elements(t)
        c_category = _content_category(ct, c, c_children)
        t_category = _content_category(tt, t, t_children)
        if {c_category, t_category} == {"element", "text"}:
            yield ComparisonEvent(
                ComparisonKind.NODE_TYPE,
                _DIFFERENT,
                Side.of(ct, c, c_category),
                Side.of(tt, t, t_category),
            )

        c_text = matcher.text_of(ct, c)
        t_text = matcher.text_of(tt, t)
        if c_text != t_text:
            yield ComparisonEvent(
                ComparisonKind.TEXT_VALUE,
                _DIFFERENT,
                Side.of(ct, c, c_text),
                Side.of(tt, t, t_text),
            )
        elif ct.direct_text(c) != tt.direct_text(t):
            yield ComparisonEvent(
                ComparisonKind.TEXT_VALUE,
                _SIMILAR,
                Side.of(ct, c, ct.direct_text(c)),
                Side.of(tt, t, tt.direct_text(t)),
            )

        if len(c_children) != len(t_children):
            yield ComparisonEvent(
                ComparisonKind.CHILD_LIST_LENGTH,
                _DIFFERENT,
                Side.of(ct, c, len(c_children)),
                Side.of(tt, t, len(t_children)),
            )

        yield from self._walk_children(
            ct, tt, c_children, matcher.match(c, t), matcher
        )

    def _walk_attributes(
        self, ct: XmlTree, c: XmlNode, tt: XmlTree, t: XmlNode
    ) -> Iterator[ComparisonEvent]:
        c_attrs = ct.attribute_map(c)
        t_attrs = tt.attribute_map(t)

        for qname, kind in _SCHEMA_KINDS:
            c_attr = c_attrs.get(qname)
            t_attr = t_attrs.get(qname)
            c_value = c_attr.value if c_attr is not None else None
            t_value = t_attr.value if t_attr is not None else None
            if c_value != t_value:
                yield ComparisonEvent(
                    kind,
                    _DIFFERENT,
                    Side.of(ct, c_attr, c_value),
                    Side.of(tt, t_attr, t_value),
                )

        if c.prefix != t.prefix:
            yield ComparisonEvent(
                ComparisonKind.NAMESPACE_PREFIX,
                _SIMILAR,
                Side.of(ct, c, c.prefix),
                Side.of(tt, t, t.prefix),
            )

        for qname, c_attr in c_attrs.items():
            if qname in SCHEMA_ATTRIBUTES:
                continue
            t_attr = t_attrs.get(qname)
            if t_attr is None:
                yield ComparisonEvent(
                    ComparisonKind.ATTR_MISSING,
                    _DIFFERENT,
                    Side.of(ct, c_attr, c_attr.value),
                    Side.of(tt, t, None),
                    detail=c_attr.name,
                )
            elif c_attr.value != t_attr.value:
                yield ComparisonEvent(
                    ComparisonKind.ATTR_VALUE,
                    _DIFFERENT,
                    Side.of(ct, c, c_attr.value),
                    Side.of(tt, t, t_attr.value),
                    detail=c_attr.name,
                )

        for qname, t_attr in t_attrs.items():
            if qname in SCHEMA_ATTRIBUTES or qname in c_attrs:
                continue
            yield ComparisonEvent(
                ComparisonKind.ATTR_MISSING,
                _DIFFERENT,
                Side.of(ct, c, None),
                Side.of(tt, t_attr, t_attr.value),
                detail=t_attr.name,
            )

    # ------------------------------------------------------------------
    # Child lists
    # ------------------------------------------------------------------

    def _walk_children(
        self,
        ct: XmlTree,
        tt: XmlTree,
        control_children: list[XmlNode],
        result: MatchResult,
        matcher: NodeMatcher,
    ) -> Iterator[ComparisonEvent]:
        paired = {m.control.index: m for m in result.pairs}
        partial = {m.control.index: m for m in result.partial}

        for child in control_children:
            match = paired.get(child.index)
            if match is not None:
                if match.control_position != match.test_position:
                    yield ComparisonEvent(
                        ComparisonKind.CHILD_LIST_SEQUENCE,
                        _SIMILAR,
                        Side.of(ct, match.control, match.control_position),
                        Side.of(tt, match.test, match.test_position),
                    )
                yield from self._walk_pair(ct, tt, match, matcher)
                continue

            rejected = partial.get(child.index)
            yield ComparisonEvent(
                ComparisonKind.CHILD_LOOKUP,
                _DIFFERENT,
                Side.of(ct, child, child.name),
                Side.of(tt, rejected.test, rejected.test.name)
                if rejected
                else Side(),
            )

        for extra in result.unmatched_test:
            yield ComparisonEvent(
                ComparisonKind.CHILD_LOOKUP,
                _DIFFERENT,
                Side(),
                Side.of(tt, extra, extra.name),
            )


def _walk_doctype(
    control: Doctype | None, test: Doctype | None
) -> Iterator[ComparisonEvent]:
    """DOCTYPE events.  Only the declared name and public id are significant."""
    if control is None and test is None:
        return
    if control is None or test is None:
        yield ComparisonEvent(
            ComparisonKind.DOCTYPE,
            _SIMILAR,
            Side(path="/", value=None if control is None else str(control)),
            Side(path="/", value=None if test is None else str(test)),
            detail="declaration",
        )
        return
    for detail, outcome, control_value, test_value in (
        ("name", _DIFFERENT, control.name, test.name),
        ("public id", _DIFFERENT, control.public_id, test.public_id),
        ("system id", _SIMILAR, control.system_id, test.system_id),
    ):
        if control_value != test_value:
            yield ComparisonEvent(
                ComparisonKind.DOCTYPE,
                outcome,
                Side(path="/", value=control_value),
                Side(path="/", value=test_value),
                detail=detail,
            )


def _content_category(
    tree: XmlTree, element: XmlNode, children: list[XmlNode]
) -> str:
    """Classify the content of ``element`` as element, text or empty."""
    if children:
        return "element"
    if _blank_check.is_blank(tree.direct_text(element)):
        return "empty"
    return "text"
