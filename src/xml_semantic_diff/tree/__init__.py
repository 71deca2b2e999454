"""Tree subpackage for XML-to-tree conversion primitives.

Re-exports the public API for the tree module:
- XmlNode: dataclass representing a node in the tree arena
- XmlTree: the arena owning every node of one document
- Doctype: the DOCTYPE declaration of a document
- NodeType: StrEnum of the three node kinds (ELEMENT, ATTRIBUTE, TEXT)
- TextNormalizer: whitespace normalization for text comparison
- TreeBuilder: parses a Document into an XmlTree
"""

from xml_semantic_diff.tree.builder import TreeBuilder
from xml_semantic_diff.tree.nodes import Doctype, NodeType, XmlNode, XmlTree
from xml_semantic_diff.tree.normalizer import TextNormalizer

__all__ = ["Doctype", "NodeType", "TextNormalizer", "TreeBuilder", "XmlNode", "XmlTree"]
