"""Difference classifier: turns raw comparison events into DifferenceRecords.

Filtering precedes classification.  An event is suppressed when its outcome
is EQUAL or SIMILAR, or when its kind is a noise kind (node category, schema
locations, child-list length or sequence).  Every surviving event becomes
exactly one ``DifferenceRecord``, chosen by the first matching rule:

1. Either target is an attribute node   -> ATTRIBUTE
2. ATTR_VALUE                           -> ATTRIBUTE_VALUE (with both elements)
3. TEXT_VALUE                           -> VALUE
4. CHILD_LOOKUP with both targets       -> STRUCTURE_UNMATCHED (attribute hint)
   CHILD_LOOKUP with control path only  -> STRUCTURE_MISSING
   CHILD_LOOKUP with test path only     -> STRUCTURE_EXTRA
   CHILD_LOOKUP with neither            -> STRUCTURE_UNMATCHED
5. anything else                        -> STRUCTURE_OTHER

``classify`` is a pure function of its event.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from xml_semantic_diff.algorithm.events import (
    NOISE_KINDS,
    ComparisonEvent,
    ComparisonKind,
    ComparisonOutcome,
    Side,
)
from xml_semantic_diff.result import DifferenceCategory, DifferenceRecord
from xml_semantic_diff.tree.nodes import NodeType

if TYPE_CHECKING:
    from xml_semantic_diff.tree.nodes import XmlNode, XmlTree

__all__ = ["classify", "classify_all", "is_suppressed"]

_ABSENT = "<absent>"


def is_suppressed(event: ComparisonEvent) -> bool:
    """True when ``event`` must not produce a difference."""
    return event.outcome != ComparisonOutcome.DIFFERENT or event.kind in NOISE_KINDS


def classify(
    event: ComparisonEvent, max_text_preview: int = 200
) -> DifferenceRecord | None:
    """Classify and render one event, or return None when it is suppressed.

    Args:
        event:            The raw comparison event.
        max_text_preview: Longest value rendered verbatim; longer values are
                          truncated with ``...``.
    """
    if is_suppressed(event):
        return None

    control_node = event.control.node
    test_node = event.test.node

    if _is_attribute(control_node) or _is_attribute(test_node):
        return _attribute_record(event, max_text_preview)
    if event.kind == ComparisonKind.ATTR_VALUE:
        return _attribute_value_record(event, max_text_preview)
    if event.kind == ComparisonKind.TEXT_VALUE:
        return _text_record(event, max_text_preview)
    if event.kind == ComparisonKind.CHILD_LOOKUP:
        return _lookup_record(event, max_text_preview)
    return _other_record(event, max_text_preview)


def classify_all(
    events: Iterable[ComparisonEvent], max_text_preview: int = 200
) -> tuple[DifferenceRecord, ...]:
    """Classify ``events`` in order, dropping suppressed ones."""
    records = (classify(event, max_text_preview) for event in events)
    return tuple(record for record in records if record is not None)


# ---------------------------------------------------------------------------
# Rendering rules
# ---------------------------------------------------------------------------


def _attribute_record(event: ComparisonEvent, limit: int) -> DifferenceRecord:
    attr_side = event.control if _is_attribute(event.control.node) else event.test
    attr = attr_side.node
    name = event.detail or (attr.name if attr is not None else "")
    return _record(
        DifferenceCategory.ATTRIBUTE,
        event,
        f"Attribute difference at {attr_side.path}: attribute '{name}' "
        f"expected {_quote(event.control.value, limit)} "
        f"but found {_quote(event.test.value, limit)}",
    )


def _attribute_value_record(event: ComparisonEvent, limit: int) -> DifferenceRecord:
    name = event.detail
    path = event.control.path or event.test.path
    return _record(
        DifferenceCategory.ATTRIBUTE_VALUE,
        event,
        f"Attribute value difference at {path}/@{name}: attribute '{name}' "
        f"expected {_quote(event.control.value, limit)} "
        f"but found {_quote(event.test.value, limit)} "
        f"(control element: {_render_side(event.control, limit)}, "
        f"test element: {_render_side(event.test, limit)})",
    )


def _text_record(event: ComparisonEvent, limit: int) -> DifferenceRecord:
    path = event.control.path or event.test.path
    return _record(
        DifferenceCategory.VALUE,
        event,
        f"Text difference at {path}: expected {_quote(event.control.value, limit)} "
        f"but found {_quote(event.test.value, limit)}",
    )


def _lookup_record(event: ComparisonEvent, limit: int) -> DifferenceRecord:
    control, test = event.control, event.test

    if control.node is not None and test.node is not None:
        return _record(
            DifferenceCategory.STRUCTURE_UNMATCHED,
            event,
            f"Element at {control.path} has no exact counterpart in the test "
            f"document (closest: {test.path}); likely an attribute or value "
            f"mismatch rather than a structural break, inspect the attributes: "
            f"{_attribute_changes(control, test, limit)}; "
            f"expected {_render_side(control, limit)} "
            f"but found {_render_side(test, limit)}",
        )
    if control.path is not None and test.path is None:
        return _record(
            DifferenceCategory.STRUCTURE_MISSING,
            event,
            f"Missing node on test side: expected {_render_side(control, limit)} "
            f"at {control.path}",
        )
    if test.path is not None and control.path is None:
        return _record(
            DifferenceCategory.STRUCTURE_EXTRA,
            event,
            f"Extra node on test side: unexpected {_render_side(test, limit)} "
            f"at {test.path}",
        )
    return _record(
        DifferenceCategory.STRUCTURE_UNMATCHED,
        event,
        f"Could not match node (control: {control.path or _ABSENT}, "
        f"test: {test.path or _ABSENT})",
    )


def _other_record(event: ComparisonEvent, limit: int) -> DifferenceRecord:
    what = f"{event.kind.value} {event.detail}" if event.detail else event.kind.value
    return _record(
        DifferenceCategory.STRUCTURE_OTHER,
        event,
        f"Structural difference ({what}) between control "
        f"{event.control.path or _ABSENT} and test {event.test.path or _ABSENT}: "
        f"expected {_quote(event.control.value, limit)} "
        f"but found {_quote(event.test.value, limit)}",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _record(
    category: DifferenceCategory, event: ComparisonEvent, message: str
) -> DifferenceRecord:
    return DifferenceRecord(
        category=category,
        message=message,
        kind=event.kind,
        control_path=event.control.path,
        test_path=event.test.path,
    )


def _is_attribute(node: XmlNode | None) -> bool:
    return node is not None and node.node_type == NodeType.ATTRIBUTE


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _quote(value: Any, limit: int) -> str:
    if value is None:
        return _ABSENT
    return f'"{_truncate(str(value), limit)}"'


def _render_side(side: Side, limit: int) -> str:
    node = side.node
    if node is None or side.tree is None:
        return _ABSENT
    return _render_element(side.tree, node, limit)


def _render_element(tree: XmlTree, element: XmlNode, limit: int) -> str:
    """``<tag name="value" ...>`` with every attribute of ``element``."""
    attrs = "".join(
        f' {attr.name}="{_truncate(attr.value, limit)}"'
        for attr in tree.attribute_nodes(element)
    )
    return f"<{element.name}{attrs}>"


def _attribute_changes(control: Side, test: Side, limit: int) -> str:
    """List each attribute whose value differs between two elements."""
    c_attrs = _attributes_of(control)
    t_attrs = _attributes_of(test)

    changes = []
    for qname in [*c_attrs, *(q for q in t_attrs if q not in c_attrs)]:
        c_attr = c_attrs.get(qname)
        t_attr = t_attrs.get(qname)
        c_value = c_attr.value if c_attr is not None else None
        t_value = t_attr.value if t_attr is not None else None
        if c_value == t_value:
            continue
        name = (c_attr or t_attr).name  # type: ignore[union-attr]
        changes.append(
            f"'{name}' expected {_quote(c_value, limit)} "
            f"but found {_quote(t_value, limit)}"
        )

    if not changes:
        return "attributes are identical, compare the element content"
    return ", ".join(changes)


def _attributes_of(side: Side) -> dict[str, XmlNode]:
    node = side.node
    if node is None or side.tree is None:
        return {}
    return side.tree.attribute_map(node)
