"""XML semantic diff - unordered, whitespace-insensitive XML comparison."""

from __future__ import annotations

import logging

from xml_semantic_diff.algorithm.config import CompareConfig, MatchStrategy
from xml_semantic_diff.api import (
    compare,
    compare_files,
    is_equivalent,
    list_differences,
)
from xml_semantic_diff.comparator import XmlComparator
from xml_semantic_diff.exceptions import (
    DocumentDecodeError,
    DocumentError,
    DocumentReadError,
    MalformedXmlError,
    ResourceNotFoundError,
    XmlDiffError,
)
from xml_semantic_diff.loader import Document, DocumentLoader
from xml_semantic_diff.result import (
    ComparisonResult,
    DifferenceCategory,
    DifferenceRecord,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "CompareConfig",
    "ComparisonResult",
    "DifferenceCategory",
    "DifferenceRecord",
    "Document",
    "DocumentDecodeError",
    "DocumentError",
    "DocumentLoader",
    "DocumentReadError",
    "MalformedXmlError",
    "MatchStrategy",
    "ResourceNotFoundError",
    "XmlComparator",
    "XmlDiffError",
    "compare",
    "compare_files",
    "is_equivalent",
    "list_differences",
]
