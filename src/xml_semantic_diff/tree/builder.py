"""TreeBuilder: parses a Document into an XmlTree node arena.

Uses lxml with a hardened parser (no entity resolution, no network access)
that drops comments and processing instructions.  Every element contributes
one ELEMENT node, one ATTRIBUTE node per attribute in declaration order, and
one TEXT node per run of direct character data (the element's leading text
and the tail of each child).  Text is stored raw; whitespace normalization
happens at comparison time.

Paths are built during traversal:
- Root is "/{root-name}"
- Each child element appends "/{name}"
- Attributes append "/@{name}", text nodes append "/text()"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lxml import etree

from xml_semantic_diff.exceptions import MalformedXmlError
from xml_semantic_diff.loader import Document
from xml_semantic_diff.tree.nodes import Doctype, NodeType, XmlNode, XmlTree

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _make_parser() -> etree.XMLParser:
    # The text was already decoded as UTF-8 by the loader and is re-encoded
    # as UTF-8 here, so the declared encoding must not be honoured.
    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        huge_tree=False,
    )


def _render_name(qname: str, prefix_map: Mapping[str, str]) -> str:
    """Render a Clark-notation name as ``prefix:local`` (or ``local``)."""
    if not qname.startswith("{"):
        return qname
    uri, local = qname[1:].split("}", 1)
    if uri == _XML_NAMESPACE:
        return f"xml:{local}"
    prefix = prefix_map.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _doctype_of(docinfo: etree.DocInfo) -> Doctype | None:
    dtd = docinfo.internalDTD
    if dtd is None:
        return None
    return Doctype(
        name=dtd.name or "",
        public_id=dtd.external_id,
        system_id=dtd.system_url,
    )


@dataclass
class TreeBuilder:
    """Converts a Document into an XmlTree.

    Example::
        builder = TreeBuilder()
        tree = builder.parse_string('<root><item id="1">x</item></root>')
        # tree.root.path == "/root"
        # tree.child_elements(tree.root)[0].path == "/root/item"
    """

    def parse(self, document: Document) -> XmlTree:
        """Parse ``document`` into a tree.

        Raises:
            MalformedXmlError: If the content is not well-formed XML.
        """
        try:
            data = document.text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise MalformedXmlError(
                f"unencodable character at offset {exc.start}: {exc.reason}",
                document.source,
            ) from exc

        try:
            root = etree.fromstring(data, _make_parser())
        except etree.XMLSyntaxError as exc:
            line, column = exc.position if exc.position else (None, None)
            raise MalformedXmlError(
                exc.msg or str(exc), document.source, line, column
            ) from exc

        docinfo = root.getroottree().docinfo
        tree = XmlTree(
            source=document.source,
            # An absent declaration reads like one with version 1.0 and no
            # standalone flag.
            xml_version=docinfo.xml_version or "1.0",
            standalone=bool(docinfo.standalone),
            doctype=_doctype_of(docinfo),
        )
        self._build_element(tree, root, parent=None, parent_path="")
        logger.debug("parsed %s into %d nodes", document.source, len(tree))
        return tree

    def parse_string(self, text: str, source: str = "<string>") -> XmlTree:
        """Parse XML held in memory."""
        return self.parse(Document(source=source, text=text))

    def _build_element(
        self,
        tree: XmlTree,
        element: etree._Element,
        parent: int | None,
        parent_path: str,
    ) -> XmlNode:
        prefix_map = {uri: pfx for pfx, uri in element.nsmap.items() if pfx}
        qname = element.tag
        name = _render_name(qname, {} if element.prefix is None else prefix_map)
        path = f"{parent_path}/{name}"

        node = tree.add(
            XmlNode(
                node_type=NodeType.ELEMENT,
                name=name,
                path=path,
                index=-1,
                parent=parent,
                qname=qname,
                prefix=element.prefix,
                line=element.sourceline,
            )
        )

        for attr_qname, attr_value in element.attrib.items():
            attr_name = _render_name(attr_qname, prefix_map)
            tree.add(
                XmlNode(
                    node_type=NodeType.ATTRIBUTE,
                    name=attr_name,
                    path=f"{path}/@{attr_name}",
                    index=-1,
                    parent=node.index,
                    value=attr_value,
                    qname=attr_qname,
                )
            )

        self._add_text(tree, node, element.text)
        for child in element:
            # Entity references left unresolved are not elements; only their
            # tail contributes direct text.
            if isinstance(child.tag, str):
                self._build_element(tree, child, node.index, path)
            self._add_text(tree, node, child.tail)

        return node

    @staticmethod
    def _add_text(tree: XmlTree, owner: XmlNode, text: str | None) -> None:
        if not text:
            return
        tree.add(
            XmlNode(
                node_type=NodeType.TEXT,
                name="",
                path=f"{owner.path}/text()",
                index=-1,
                parent=owner.index,
                value=text,
            )
        )
