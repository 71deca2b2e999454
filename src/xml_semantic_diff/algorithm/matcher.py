"""NodeMatcher: order-independent pairing of sibling elements.

Children of two matched elements are paired one-to-one.  Which pairs are
allowed is decided by an ``ElementSelector``; which of the allowed pairs are
chosen is an optimal bipartite assignment (scipy's ``linear_sum_assignment``)
over a subtree-distance cost matrix, so that duplicate candidates pair with
their closest counterparts instead of whichever comes first.

Forbidden pairs are ``np.inf`` in the cost matrix.  ``hungarian_match``
guards the solver against them.  Guard value formula:
``finite_max * min(m, n) + 1.0``, large enough that the assignment never
trades a finite pair for a forbidden one, so every element that has an
allowed partner gets one.
"""

from __future__ import annotations

from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

from xml_semantic_diff.algorithm.selectors import comparable_attributes
from xml_semantic_diff.tree.normalizer import TextNormalizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from xml_semantic_diff.algorithm.selectors import ElementSelector
    from xml_semantic_diff.tree.nodes import XmlNode, XmlTree

__all__ = ["MatchResult", "NodeMatch", "NodeMatcher", "hungarian_match"]

# Tie-breaker favouring the original sibling order among equal-cost pairs.
_POSITION_EPSILON = 1e-6


def hungarian_match(
    cost_matrix: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute optimal bipartite assignment with np.inf guard.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  May contain
            ``np.inf`` to mark forbidden assignments.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays giving the
        optimal assignment, with any pair whose *original* cost was
        infinite removed.  Empty arrays are returned when no valid
        assignment exists.
    """
    if cost_matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.asarray(cost_matrix, dtype=float)
    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return np.array([], dtype=int), np.array([], dtype=int)

    if inf_mask.any():
        finite_max = float(cost[~inf_mask].max())
        guard_value = finite_max * min(cost.shape) + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        keep = ~inf_mask[row_ind, col_ind]
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return row_ind, col_ind


@dataclass(frozen=True, slots=True)
class NodeMatch:
    """A control element paired with a test element.

    Attributes:
        control:          The control-side element.
        test:             The test-side element.
        control_position: Index of ``control`` among its element siblings.
        test_position:    Index of ``test`` among its element siblings.
    """

    control: XmlNode
    test: XmlNode
    control_position: int
    test_position: int


@dataclass(slots=True)
class MatchResult:
    """Outcome of matching one pair of child lists.

    Attributes:
        pairs:             Selector-approved pairs, in control document order.
        partial:           Same-named elements the selector rejected, paired
                           so they can be reported as one element that failed
                           to match rather than as one missing and one extra.
        unmatched_control: Control children with no partner at all.
        unmatched_test:    Test children with no partner at all.
    """

    pairs: list[NodeMatch] = field(default_factory=list)
    partial: list[NodeMatch] = field(default_factory=list)
    unmatched_control: list[XmlNode] = field(default_factory=list)
    unmatched_test: list[XmlNode] = field(default_factory=list)


@dataclass(slots=True)
class _SubtreeIndex:
    """Per-element data of one tree, keyed by arena index."""

    fingerprints: dict[int, int] = field(default_factory=dict)
    attributes: dict[int, frozenset[tuple[str, str]]] = field(default_factory=dict)
    texts: dict[int, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls, tree: XmlTree, text_of: Callable[[XmlTree, XmlNode], str]
    ) -> _SubtreeIndex:
        index = cls()
        # Arena order is pre-order, so reversed arena order visits children
        # before their parents.
        for node in reversed(tree.nodes):
            if not node.is_element:
                continue
            attrs = frozenset(comparable_attributes(tree, node).items())
            text = text_of(tree, node)
            children = tuple(
                sorted(index.fingerprints[c.index] for c in tree.child_elements(node))
            )
            index.attributes[node.index] = attrs
            index.texts[node.index] = text
            # Order-independent hash of the whole subtree.
            index.fingerprints[node.index] = hash(
                (node.qname, tuple(sorted(attrs)), text, children)
            )
        return index


class NodeMatcher:
    """Pairs sibling elements of two trees using an ElementSelector.

    A matcher is bound to one control/test tree pair.  Subtree fingerprints,
    comparable attributes and texts of both trees are computed once at
    construction and used to rank candidate pairs.

    Children with identical subtrees are paired with each other first, in
    document order, whenever the selector accepts them.  Only the remaining
    children go through the assignment solver.

    Example::

        matcher = NodeMatcher(control_tree, test_tree, ByNameAndAllAttributes())
        roots = matcher.match_roots()
        children = matcher.match(roots.pairs[0].control, roots.pairs[0].test)
    """

    def __init__(
        self,
        control_tree: XmlTree,
        test_tree: XmlTree,
        selector: ElementSelector,
        normalize_whitespace: bool = True,
    ) -> None:
        self._control_tree = control_tree
        self._test_tree = test_tree
        self._selector = selector
        self._normalizer = TextNormalizer() if normalize_whitespace else None
        self._control = _SubtreeIndex.build(control_tree, self.text_of)
        self._test = _SubtreeIndex.build(test_tree, self.text_of)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def match_roots(self) -> MatchResult:
        """Match the two root elements as single-element child lists."""
        return self._match_lists([self._control_tree.root], [self._test_tree.root])

    def match(self, control_parent: XmlNode, test_parent: XmlNode) -> MatchResult:
        """Match the direct child elements of two already-paired elements."""
        return self._match_lists(
            self._control_tree.child_elements(control_parent),
            self._test_tree.child_elements(test_parent),
        )

    def text_of(self, tree: XmlTree, element: XmlNode) -> str:
        """Direct text of ``element`` in comparison form."""
        text = tree.direct_text(element)
        if self._normalizer is None:
            return text
        return self._normalizer.normalize(text)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def _match_lists(
        self, control: list[XmlNode], test: list[XmlNode]
    ) -> MatchResult:
        result = MatchResult()
        if not control or not test:
            result.unmatched_control.extend(control)
            result.unmatched_test.extend(test)
            return result

        pairs = self._pair_identical(control, test)
        left_c, left_t = _unpaired(len(control), len(test), pairs)
        pairs.extend(self._pair_selected(control, test, left_c, left_t))
        for r, c_ in sorted(pairs):
            result.pairs.append(NodeMatch(control[r], test[c_], r, c_))

        left_c, left_t = _unpaired(len(control), len(test), pairs)
        partial = self._pair_leftovers(control, test, left_c, left_t)
        for r, c_ in partial:
            result.partial.append(NodeMatch(control[r], test[c_], r, c_))

        paired_c = {r for r, _ in partial}
        paired_t = {c_ for _, c_ in partial}
        result.unmatched_control.extend(
            control[i] for i in left_c if i not in paired_c
        )
        result.unmatched_test.extend(test[j] for j in left_t if j not in paired_t)
        return result

    def _pair_identical(
        self, control: list[XmlNode], test: list[XmlNode]
    ) -> list[tuple[int, int]]:
        """Pair children with identical subtrees, first come first served."""
        waiting: dict[int, deque[int]] = defaultdict(deque)
        for j, t in enumerate(test):
            waiting[self._test.fingerprints[t.index]].append(j)

        pairs: list[tuple[int, int]] = []
        for i, c in enumerate(control):
            queue = waiting.get(self._control.fingerprints[c.index])
            if not queue:
                continue
            if self._selector.can_be_compared(
                self._control_tree, c, self._test_tree, test[queue[0]]
            ):
                pairs.append((i, queue.popleft()))
        return pairs

    def _pair_selected(
        self,
        control: list[XmlNode],
        test: list[XmlNode],
        left_c: list[int],
        left_t: list[int],
    ) -> list[tuple[int, int]]:
        """Optimal assignment over the selector-approved remaining pairs."""
        if not left_c or not left_t:
            return []

        cost = np.full((len(left_c), len(left_t)), np.inf)
        for a, i in enumerate(left_c):
            c = control[i]
            for b, j in enumerate(left_t):
                t = test[j]
                if self._selector.can_be_compared(
                    self._control_tree, c, self._test_tree, t
                ):
                    distance = self._subtree_distance(c, t)
                    cost[a, b] = distance + _POSITION_EPSILON * abs(i - j)

        row_ind, col_ind = hungarian_match(cost)
        return [
            (left_c[a], left_t[b])
            for a, b in zip(row_ind.tolist(), col_ind.tolist(), strict=True)
        ]

    def _pair_leftovers(
        self,
        control: list[XmlNode],
        test: list[XmlNode],
        left_c: list[int],
        left_t: list[int],
    ) -> list[tuple[int, int]]:
        """Pair selector-rejected children that share a tag name.

        Cost is the number of differing attributes (plus a half point for a
        text difference), so the element whose attributes changed least is
        taken as the counterpart.
        """
        if not left_c or not left_t:
            return []

        cost = np.full((len(left_c), len(left_t)), np.inf)
        for a, i in enumerate(left_c):
            c = control[i]
            c_attrs = self._control.attributes[c.index]
            c_text = self._control.texts[c.index]
            for b, j in enumerate(left_t):
                t = test[j]
                if c.qname != t.qname:
                    continue
                changed = len(c_attrs ^ self._test.attributes[t.index])
                text_cost = 0.0 if c_text == self._test.texts[t.index] else 0.5
                cost[a, b] = changed + text_cost + _POSITION_EPSILON * abs(i - j)

        row_ind, col_ind = hungarian_match(cost)
        return sorted(
            (left_c[a], left_t[b])
            for a, b in zip(row_ind.tolist(), col_ind.tolist(), strict=True)
        )

    # ------------------------------------------------------------------
    # Subtree distance
    # ------------------------------------------------------------------

    def _subtree_distance(self, control: XmlNode, test: XmlNode) -> float:
        """Distance in [0, 1] between two candidate subtrees.

        0.0 for canonically identical subtrees; otherwise the mean of the
        attribute, text and child-multiset distances.
        """
        c_index, t_index = self._control, self._test
        if c_index.fingerprints[control.index] == t_index.fingerprints[test.index]:
            return 0.0

        c_attrs = c_index.attributes[control.index]
        t_attrs = t_index.attributes[test.index]
        attr_cost = len(c_attrs ^ t_attrs) / max(len(c_attrs | t_attrs), 1)

        text_cost = (
            0.0 if c_index.texts[control.index] == t_index.texts[test.index] else 1.0
        )

        c_children = Counter(
            c_index.fingerprints[n.index]
            for n in self._control_tree.child_elements(control)
        )
        t_children = Counter(
            t_index.fingerprints[n.index]
            for n in self._test_tree.child_elements(test)
        )
        total = max(sum(c_children.values()), sum(t_children.values()), 1)
        common = sum((c_children & t_children).values())
        child_cost = 1.0 - common / total

        return (attr_cost + text_cost + child_cost) / 3.0


def _unpaired(
    m: int, n: int, pairs: list[tuple[int, int]]
) -> tuple[list[int], list[int]]:
    """Positions on each side not taken by ``pairs``."""
    taken_c = {r for r, _ in pairs}
    taken_t = {c_ for _, c_ in pairs}
    return (
        [i for i in range(m) if i not in taken_c],
        [j for j in range(n) if j not in taken_t],
    )
