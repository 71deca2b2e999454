"""DocumentSource Protocol for the xml-semantic-diff loading extension point.

Defines the structural interface every document source must satisfy.
Users can plug in custom sources (an HTTP fixture server, a database table,
an in-memory dict) without inheriting from any base class.  Any class with a
conformant ``load`` method passes ``isinstance`` checks.

Example::

    from xml_semantic_diff.loader import Document
    from xml_semantic_diff.protocols import DocumentSource

    class DictSource:
        def __init__(self, docs: dict[str, str]) -> None:
            self._docs = docs

        def load(self, logical_path: str) -> Document:
            return Document(source=logical_path, text=self._docs[logical_path])

    assert isinstance(DictSource({}), DocumentSource)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from xml_semantic_diff.loader import Document


@runtime_checkable
class DocumentSource(Protocol):
    """Structural protocol for document sources.

    The ``load`` method must:
    - Accept a logical path string.
    - Return a ``Document`` whose ``text`` is the decoded content.
    - Raise a ``DocumentError`` subclass (``ResourceNotFoundError``,
      ``DocumentReadError``, ``DocumentDecodeError``) when it cannot.
    """

    def load(self, logical_path: str) -> Document: ...
