"""Exception hierarchy for xml-semantic-diff.

Only conditions that prevent building a comparable tree are exceptions.
Differences between two successfully parsed documents are never raised;
they are returned as ``DifferenceRecord`` entries of a ``ComparisonResult``.

Hierarchy::

    XmlDiffError(Exception)
      DocumentError                                -- document cannot become a tree
        ResourceNotFoundError(FileNotFoundError)   -- no content at the logical path
        DocumentReadError(OSError)                 -- read failed
        DocumentDecodeError(ValueError)            -- content is not valid UTF-8
        MalformedXmlError(ValueError)              -- content is not well-formed XML

Each concrete class also subclasses the closest builtin so callers that
already catch ``OSError`` or ``ValueError`` keep working.
"""

from __future__ import annotations

__all__ = [
    "DocumentDecodeError",
    "DocumentError",
    "DocumentReadError",
    "MalformedXmlError",
    "ResourceNotFoundError",
    "XmlDiffError",
]


class XmlDiffError(Exception):
    """Base class for every error raised by xml-semantic-diff."""


class DocumentError(XmlDiffError):
    """A document could not be loaded, decoded or parsed.

    Attributes:
        source: Logical path (or ``"<string>"``) of the offending document.
    """

    def __init__(self, message: str, source: str) -> None:
        super().__init__(message)
        self.source = source


class ResourceNotFoundError(DocumentError, FileNotFoundError):
    """No content exists at the requested logical path."""

    def __str__(self) -> str:
        return f"resource not found: {self.source}"


class DocumentReadError(DocumentError, OSError):
    """Reading the document failed after it was located."""

    def __str__(self) -> str:
        return f"could not read {self.source}: {self.args[0]}"


class DocumentDecodeError(DocumentError, ValueError):
    """The document bytes are not valid UTF-8.

    Attributes:
        position: Byte offset of the first invalid sequence.
    """

    def __init__(self, message: str, source: str, position: int) -> None:
        super().__init__(message, source)
        self.position = position

    def __str__(self) -> str:
        return f"{self.source}: invalid UTF-8 at byte {self.position}: {self.args[0]}"


class MalformedXmlError(DocumentError, ValueError):
    """The document is not well-formed XML.

    Attributes:
        line:   1-based line of the error, or None when the parser gave none.
        column: 1-based column of the error, or None.
    """

    def __init__(
        self,
        message: str,
        source: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message, source)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.source}: malformed XML: {self.args[0]}"
        return (
            f"{self.source}:{self.line}:{self.column or 0}: "
            f"malformed XML: {self.args[0]}"
        )
