"""Element selectors: the pluggable policy deciding which elements may pair.

The matcher only ever asks one question of a selector: may this control
element be paired with that test element?  Swapping the selector changes
how differences are reported without touching the walk or the classifier.

- ``ByNameAndAllAttributes`` (the default) requires equal tag names and
  equal attribute sets.  An element whose attributes differ in any way has
  no partner, and the difference surfaces as a lookup failure.
- ``ByName`` requires equal tag names only, so attribute changes surface as
  individual attribute differences on a paired element.

Schema-location attributes (``xsi:schemaLocation`` and
``xsi:noNamespaceSchemaLocation``) never take part in selection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from xml_semantic_diff.algorithm.config import MatchStrategy

if TYPE_CHECKING:
    from xml_semantic_diff.tree.nodes import XmlNode, XmlTree

__all__ = [
    "NO_NAMESPACE_SCHEMA_LOCATION",
    "SCHEMA_ATTRIBUTES",
    "SCHEMA_LOCATION",
    "ByName",
    "ByNameAndAllAttributes",
    "ElementSelector",
    "comparable_attributes",
    "selector_for",
]

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{{{XSI_NAMESPACE}}}schemaLocation"
NO_NAMESPACE_SCHEMA_LOCATION = f"{{{XSI_NAMESPACE}}}noNamespaceSchemaLocation"
SCHEMA_ATTRIBUTES = frozenset({SCHEMA_LOCATION, NO_NAMESPACE_SCHEMA_LOCATION})


def comparable_attributes(tree: XmlTree, element: XmlNode) -> dict[str, str]:
    """Clark-name -> value for every attribute except schema locations."""
    return {
        qname: attr.value
        for qname, attr in tree.attribute_map(element).items()
        if qname not in SCHEMA_ATTRIBUTES
    }


@runtime_checkable
class ElementSelector(Protocol):
    """Structural protocol for element pairing policies."""

    def can_be_compared(
        self,
        control_tree: XmlTree,
        control: XmlNode,
        test_tree: XmlTree,
        test: XmlNode,
    ) -> bool: ...


class ByName:
    """Pairs elements with the same (namespace-qualified) tag name."""

    def can_be_compared(
        self,
        control_tree: XmlTree,
        control: XmlNode,
        test_tree: XmlTree,
        test: XmlNode,
    ) -> bool:
        return control.qname == test.qname

    def __repr__(self) -> str:
        return "ByName()"


class ByNameAndAllAttributes:
    """Pairs elements with the same tag name and the same attribute set.

    Attribute order is irrelevant; names and values must all be equal.
    """

    def can_be_compared(
        self,
        control_tree: XmlTree,
        control: XmlNode,
        test_tree: XmlTree,
        test: XmlNode,
    ) -> bool:
        if control.qname != test.qname:
            return False
        return comparable_attributes(control_tree, control) == comparable_attributes(
            test_tree, test
        )

    def __repr__(self) -> str:
        return "ByNameAndAllAttributes()"


def selector_for(strategy: MatchStrategy) -> ElementSelector:
    """Return the selector implementing ``strategy``."""
    if strategy == MatchStrategy.NAME:
        return ByName()
    return ByNameAndAllAttributes()
