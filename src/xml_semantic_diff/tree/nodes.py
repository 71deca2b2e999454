"""XmlNode dataclass, NodeType StrEnum and the XmlTree node arena.

A parsed document is held as a flat arena of ``XmlNode`` objects owned by a
single ``XmlTree``.  Nodes refer to each other by arena index (``parent``,
``children``, ``attributes``) rather than by object reference, so a tree has
no reference cycles and nodes are never shared between trees.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto


class NodeType(StrEnum):
    """The three node variants of an XML tree.

    - ELEMENT   -> "element"   : An element with a tag name
    - ATTRIBUTE -> "attribute" : A name/value pair owned by an element
    - TEXT      -> "text"      : A run of character data owned by an element
    """

    ELEMENT = auto()
    ATTRIBUTE = auto()
    TEXT = auto()


@dataclass(slots=True)
class XmlNode:
    """A node in the XML tree arena.

    Attributes:
        node_type:  Which variant this is (see NodeType).
        name:       Rendered tag name for ELEMENT, attribute name for ATTRIBUTE,
                    empty string for TEXT.
        path:       XPath-like location, e.g. "/root/item", "/root/item/@id",
                    "/root/item/text()".
        index:      Position of this node in the owning tree's arena.
        parent:     Arena index of the owning element; None for the root.
        value:      Attribute value or raw text; empty string for ELEMENT.
        qname:      Clark-notation name ("{uri}local") used for matching;
                    equal to ``name`` for names without a namespace.
        prefix:     Namespace prefix of an ELEMENT, or None.
        line:       Source line of an ELEMENT when known.
        children:   Arena indices of child ELEMENT and TEXT nodes in document
                    order.
        attributes: Arena indices of ATTRIBUTE nodes in declaration order.
    """

    node_type: NodeType
    name: str
    path: str
    index: int
    parent: int | None = None
    value: str = ""
    qname: str = ""
    prefix: str | None = None
    line: int | None = None
    children: list[int] = field(default_factory=list)
    attributes: list[int] = field(default_factory=list)

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT


@dataclass(frozen=True, slots=True)
class Doctype:
    """The DOCTYPE declaration of a document.

    Attributes:
        name:      Declared root element name.
        public_id: PUBLIC identifier, or None.
        system_id: SYSTEM identifier (URL), or None.
    """

    name: str
    public_id: str | None = None
    system_id: str | None = None

    def __str__(self) -> str:
        if self.public_id is not None:
            system_id = self.system_id or ""
            return f'<!DOCTYPE {self.name} PUBLIC "{self.public_id}" "{system_id}">'
        if self.system_id is not None:
            return f'<!DOCTYPE {self.name} SYSTEM "{self.system_id}">'
        return f"<!DOCTYPE {self.name}>"


@dataclass(slots=True)
class XmlTree:
    """Arena owning every node of one parsed document.

    Attributes:
        source:      Logical path of the document the tree was built from.
        nodes:       The arena.  ``nodes[0]`` is the root element.
        xml_version: Version from the XML declaration ("1.0" when absent).
        standalone:  True only for standalone="yes" in the XML declaration.
        doctype:     The DOCTYPE declaration, or None when there is none.
    """

    source: str
    nodes: list[XmlNode] = field(default_factory=list)
    xml_version: str = "1.0"
    standalone: bool = False
    doctype: Doctype | None = None

    @property
    def root(self) -> XmlNode:
        return self.nodes[0]

    def node(self, index: int) -> XmlNode:
        return self.nodes[index]

    def parent(self, node: XmlNode) -> XmlNode | None:
        """Return the element owning ``node``, or None for the root."""
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def add(self, node: XmlNode) -> XmlNode:
        """Append ``node`` to the arena, assigning its index."""
        node.index = len(self.nodes)
        self.nodes.append(node)
        if node.parent is not None:
            owner = self.nodes[node.parent]
            if node.node_type == NodeType.ATTRIBUTE:
                owner.attributes.append(node.index)
            else:
                owner.children.append(node.index)
        return node

    def child_elements(self, node: XmlNode) -> list[XmlNode]:
        return [
            self.nodes[i] for i in node.children if self.nodes[i].is_element
        ]

    def text_nodes(self, node: XmlNode) -> list[XmlNode]:
        return [
            self.nodes[i]
            for i in node.children
            if self.nodes[i].node_type == NodeType.TEXT
        ]

    def attribute_nodes(self, node: XmlNode) -> list[XmlNode]:
        return [self.nodes[i] for i in node.attributes]

    def attribute_map(self, node: XmlNode) -> dict[str, XmlNode]:
        """Map Clark-notation attribute name to attribute node."""
        return {self.nodes[i].qname: self.nodes[i] for i in node.attributes}

    def direct_text(self, node: XmlNode) -> str:
        """Concatenation of the direct text children of ``node``.

        Text of descendant elements is not included.
        """
        return "".join(t.value for t in self.text_nodes(node))

    def iter(self, node: XmlNode | None = None) -> Iterator[XmlNode]:
        """Yield ``node`` (default: root) and its descendant elements, depth-first."""
        start = self.root if node is None else node
        stack = [start]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.child_elements(current)))

    def __len__(self) -> int:
        return len(self.nodes)
